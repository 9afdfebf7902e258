"""Tests for the Profile entity and derived status."""

from types import SimpleNamespace

import pytest

from rolegate.domain.auth.model.role_level import RoleLevel
from rolegate.domain.profile.model.profile import Profile, ProfileChanges
from rolegate.domain.profile.model.status import ProfileState, ProfileStatus
from rolegate.domain.shared.error import InvalidStateError, ValidationError
from tests.unit.factories import make_profile


class TestCreate:
    def test_new_profile_is_unapproved(self) -> None:
        profile = Profile.create(user_id="user-1", name="Ada", department_id=1, role_id=10)

        assert profile.approved is False
        assert profile.state == ProfileState.COMPLETE_UNAPPROVED

    def test_name_is_trimmed(self) -> None:
        profile = Profile.create(user_id="user-1", name="  Ada ", department_id=1, role_id=2)

        assert profile.name == "Ada"

    @pytest.mark.parametrize(
        ("name", "department_id", "role_id", "field"),
        [
            (None, 1, 2, "name"),
            ("   ", 1, 2, "name"),
            ("Ada", None, 2, "department_id"),
            ("Ada", 1, None, "role_id"),
        ],
    )
    def test_incomplete_creation_is_rejected(self, name, department_id, role_id, field) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Profile.create(user_id="user-1", name=name, department_id=department_id, role_id=role_id)

        assert exc_info.value.field == field


class TestStatus:
    def test_no_profile(self) -> None:
        status = ProfileStatus.derive(None)

        assert status == ProfileStatus(has_profile=False, is_complete=False, is_approved=False)
        assert status.state == ProfileState.NO_PROFILE

    def test_blank_name_is_incomplete(self) -> None:
        record = SimpleNamespace(name=" ", department_id=1, role_id=2, approved=False)

        assert ProfileStatus.derive(record).state == ProfileState.INCOMPLETE

    def test_approved_flag_on_incomplete_record(self) -> None:
        record = SimpleNamespace(name="Ada", department_id=None, role_id=2, approved=True)
        status = ProfileStatus.derive(record)

        assert status.is_approved is True
        assert status.state == ProfileState.INCOMPLETE

    def test_complete_approved(self) -> None:
        assert make_profile(approved=True).state == ProfileState.COMPLETE_APPROVED

    def test_role_level_without_role_is_open(self) -> None:
        assert make_profile(role_id=None).role_level is RoleLevel.OPEN

    def test_role_level_normalizes_gap_values(self) -> None:
        assert make_profile(level=7).role_level is RoleLevel.OPEN


class TestOwnerEdit:
    def test_edit_revokes_approval(self) -> None:
        profile = make_profile(approved=True)

        profile.apply_owner_edit(ProfileChanges(name="New name"))

        assert profile.name == "New name"
        assert profile.approved is False
        assert profile.state == ProfileState.COMPLETE_UNAPPROVED

    def test_role_change_drops_loaded_role(self) -> None:
        profile = make_profile(approved=True)

        profile.apply_owner_edit(ProfileChanges(role_id=5))

        assert profile.role_id == 5
        assert profile.role is None

    def test_empty_edit_is_rejected(self) -> None:
        profile = make_profile(approved=True)

        with pytest.raises(ValidationError):
            profile.apply_owner_edit(ProfileChanges())

        assert profile.approved is True

    def test_blank_name_is_rejected(self) -> None:
        profile = make_profile()

        with pytest.raises(ValidationError) as exc_info:
            profile.apply_owner_edit(ProfileChanges(name="  "))

        assert exc_info.value.field == "name"

    def test_clearing_a_reference_is_rejected(self) -> None:
        profile = make_profile()

        with pytest.raises(ValidationError):
            profile.apply_owner_edit(ProfileChanges(department_id=None))

    def test_only_provided_fields_are_applied(self) -> None:
        changes = ProfileChanges(name="Grace")

        assert changes.provided() == {"name": "Grace"}


class TestAdminEdit:
    def test_admin_edit_keeps_approval(self) -> None:
        profile = make_profile(approved=True)

        profile.apply_admin_edit(ProfileChanges(role_id=3))

        assert profile.role_id == 3
        assert profile.approved is True

    def test_admin_approves(self) -> None:
        profile = make_profile(approved=False)

        profile.apply_admin_edit(ProfileChanges(), approved=True)

        assert profile.approved is True

    def test_admin_revokes(self) -> None:
        profile = make_profile(approved=True)

        profile.apply_admin_edit(ProfileChanges(), approved=False)

        assert profile.approved is False

    def test_cannot_approve_incomplete_profile(self) -> None:
        profile = make_profile(name=None, approved=False)

        with pytest.raises(InvalidStateError) as exc_info:
            profile.apply_admin_edit(ProfileChanges(), approved=True)

        assert exc_info.value.code == "INVALID_TRANSITION"

    def test_noop_review_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_profile().apply_admin_edit(ProfileChanges(), approved=None)
