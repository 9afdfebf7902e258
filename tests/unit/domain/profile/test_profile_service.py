"""Tests for ProfileService lifecycle operations."""

from unittest.mock import AsyncMock

import pytest

from rolegate.domain.profile.model.profile import ProfileChanges
from rolegate.domain.profile.service.profile import ProfileService
from rolegate.domain.shared.error import ConflictError, NotFoundError, ValidationError
from tests.unit.factories import ENGINEERING, make_profile, make_role


def _make_service(existing=None, reloaded=None, department=ENGINEERING, role=None) -> ProfileService:
    profile_repo = AsyncMock()
    # First lookup sees the existing record, the reload after a write sees the stored one
    profile_repo.get_by_user_id.side_effect = [existing, reloaded or existing]

    department_repo = AsyncMock()
    department_repo.get.return_value = department
    role_repo = AsyncMock()
    role_repo.get.return_value = role if role is not None else make_role()

    return ProfileService(
        _profile_repo=profile_repo,
        _department_repo=department_repo,
        _role_repo=role_repo,
    )


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_unapproved_profile(self) -> None:
        stored = make_profile(approved=False)
        service = _make_service(existing=None, reloaded=stored)

        result = await service.create("user-1", "Ada", 1, 2)

        added = service._profile_repo.add.await_args.args[0]
        assert added.approved is False
        assert added.user_id == "user-1"
        assert result is stored

    @pytest.mark.asyncio
    async def test_existing_profile_conflicts(self) -> None:
        service = _make_service(existing=make_profile())

        with pytest.raises(ConflictError) as exc_info:
            await service.create("user-1", "Ada", 1, 2)

        assert exc_info.value.code == "PROFILE_ALREADY_EXISTS"
        service._profile_repo.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_department_is_invalid(self) -> None:
        service = _make_service(existing=None, department=None)
        service._department_repo.get.return_value = None

        with pytest.raises(ValidationError, match="Invalid department or role"):
            await service.create("user-1", "Ada", 99, 2)

    @pytest.mark.asyncio
    async def test_missing_fields_are_invalid(self) -> None:
        with pytest.raises(ValidationError):
            await _make_service(existing=None).create("user-1", "Ada", None, 2)


class TestUpdateOwn:
    @pytest.mark.asyncio
    async def test_owner_edit_revokes_approval(self) -> None:
        existing = make_profile(approved=True)
        service = _make_service(existing=existing)

        await service.update_own("user-1", ProfileChanges(name="New"))

        written = service._profile_repo.update.await_args.args[0]
        assert written.name == "New"
        assert written.approved is False

    @pytest.mark.asyncio
    async def test_empty_edit_is_rejected_before_lookup(self) -> None:
        service = _make_service(existing=make_profile())

        with pytest.raises(ValidationError):
            await service.update_own("user-1", ProfileChanges())

        service._profile_repo.get_by_user_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_profile(self) -> None:
        with pytest.raises(NotFoundError):
            await _make_service(existing=None).update_own("user-1", ProfileChanges(name="New"))

    @pytest.mark.asyncio
    async def test_unknown_role_is_invalid(self) -> None:
        service = _make_service(existing=make_profile())
        service._role_repo.get.return_value = None

        with pytest.raises(ValidationError) as exc_info:
            await service.update_own("user-1", ProfileChanges(role_id=99))

        assert exc_info.value.field == "roleId"
        service._profile_repo.update.assert_not_awaited()


class TestReview:
    @pytest.mark.asyncio
    async def test_approve(self) -> None:
        service = _make_service(existing=make_profile(approved=False))

        await service.review("user-1", ProfileChanges(), approved=True, reviewer_id="admin")

        assert service._profile_repo.update.await_args.args[0].approved is True

    @pytest.mark.asyncio
    async def test_reassign_keeps_approval(self) -> None:
        service = _make_service(existing=make_profile(approved=True))

        await service.review("user-1", ProfileChanges(role_id=3), approved=None, reviewer_id="admin")

        written = service._profile_repo.update.await_args.args[0]
        assert written.role_id == 3
        assert written.approved is True

    @pytest.mark.asyncio
    async def test_unknown_user(self) -> None:
        with pytest.raises(NotFoundError):
            await _make_service(existing=None).review("ghost", ProfileChanges(), approved=True, reviewer_id="admin")
