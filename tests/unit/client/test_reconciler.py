"""Tests for the client-side status reconciler."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import httpx
import pytest

from rolegate.application.api.v1.schemas import ApprovalModeResponse, ProfileResponse
from rolegate.client.api import ApiError, RoleGateClient
from rolegate.client.cache import InvalidationTag, ProfileCache
from rolegate.client.reconciler import StatusReconciler, UiAction, action_for_denial, decide_action
from rolegate.domain.profile.model.status import ProfileState, ProfileStatus

NO_PROFILE = ProfileStatus(has_profile=False, is_complete=False, is_approved=False)
INCOMPLETE = ProfileStatus(has_profile=True, is_complete=False, is_approved=False)
UNAPPROVED = ProfileStatus(has_profile=True, is_complete=True, is_approved=False)
APPROVED = ProfileStatus(has_profile=True, is_complete=True, is_approved=True)


def _profile(approved: bool) -> ProfileResponse:
    now = datetime.now(UTC)
    return ProfileResponse(
        id="3f1c",
        user_id="alice",
        name="Alice",
        department_id=1,
        role_id=2,
        approved=approved,
        state=ProfileState.COMPLETE_APPROVED if approved else ProfileState.COMPLETE_UNAPPROVED,
        created_at=now,
        updated_at=now,
    )


def _client(profile: ProfileResponse | None = None, strict: bool = False) -> AsyncMock:
    client = AsyncMock()
    client.get_profile.return_value = profile
    client.get_approval_mode.return_value = ApprovalModeResponse(
        strict=strict, enforcement="strict" if strict else "advisory"
    )
    return client


class TestDecideAction:
    @pytest.mark.parametrize("status", [NO_PROFILE, INCOMPLETE])
    def test_missing_or_incomplete_prompts_completion(self, status: ProfileStatus) -> None:
        assert decide_action(status, strict=False, path="/dashboard") is UiAction.COMPLETION_PROMPT
        assert decide_action(status, strict=True, path="/dashboard") is UiAction.COMPLETION_PROMPT

    def test_no_prompt_on_profile_page(self) -> None:
        assert decide_action(NO_PROFILE, strict=False, path="/profile") is UiAction.NONE

    def test_strict_unapproved_redirects(self) -> None:
        assert decide_action(UNAPPROVED, strict=True, path="/dashboard") is UiAction.PENDING_APPROVAL_REDIRECT
        assert decide_action(UNAPPROVED, strict=True, path="/profile/edit") is UiAction.NONE

    def test_advisory_unapproved_shows_banner(self) -> None:
        assert decide_action(UNAPPROVED, strict=False, path="/profile") is UiAction.APPROVAL_BANNER
        assert (
            decide_action(UNAPPROVED, strict=False, path="/dashboard", banner_dismissed=True) is UiAction.NONE
        )

    def test_approved_needs_nothing(self) -> None:
        assert decide_action(APPROVED, strict=True, path="/dashboard") is UiAction.NONE


class TestActionForDenial:
    def test_mapping(self) -> None:
        assert action_for_denial(401, "UNAUTHENTICATED") is UiAction.LOGIN_REDIRECT
        assert action_for_denial(403, "PROFILE_NOT_FOUND") is UiAction.COMPLETION_PROMPT
        assert action_for_denial(403, "PROFILE_INCOMPLETE") is UiAction.COMPLETION_PROMPT
        assert action_for_denial(403, "PROFILE_PENDING_APPROVAL") is UiAction.PENDING_APPROVAL_REDIRECT
        assert action_for_denial(403, "INSUFFICIENT_ROLE") is UiAction.PERMISSION_DENIED
        assert action_for_denial(500, "INTERNAL_ERROR") is UiAction.NONE


class TestStatusReconciler:
    @pytest.mark.asyncio
    async def test_reconcile_derives_status(self) -> None:
        reconciler = StatusReconciler(_client(_profile(approved=False)), ProfileCache(), "alice")

        result = await reconciler.reconcile("/dashboard")

        assert result.status == UNAPPROVED
        assert result.action is UiAction.APPROVAL_BANNER

    @pytest.mark.asyncio
    async def test_banner_dismissal_lasts_until_invalidation(self) -> None:
        cache = ProfileCache()
        reconciler = StatusReconciler(_client(_profile(approved=False)), cache, "alice")

        reconciler.dismiss_banner()
        assert (await reconciler.reconcile("/dashboard")).action is UiAction.NONE

        cache.invalidate(InvalidationTag.PROFILE_MUTATED, "alice")
        assert (await reconciler.reconcile("/dashboard")).action is UiAction.APPROVAL_BANNER

    @pytest.mark.asyncio
    async def test_uses_cache_until_mutation(self) -> None:
        client = _client(_profile(approved=False))
        cache = ProfileCache()
        reconciler = StatusReconciler(client, cache, "alice")

        await reconciler.reconcile()
        client.get_profile.return_value = _profile(approved=True)
        assert (await reconciler.reconcile()).status == UNAPPROVED

        cache.invalidate(InvalidationTag.PROFILE_MUTATED, "alice")
        assert (await reconciler.reconcile()).status == APPROVED
        assert client.get_profile.await_count == 2

    @pytest.mark.asyncio
    async def test_strict_mode_redirects(self) -> None:
        reconciler = StatusReconciler(_client(_profile(approved=False), strict=True), ProfileCache(), "alice")

        result = await reconciler.reconcile("/dashboard")

        assert result.action is UiAction.PENDING_APPROVAL_REDIRECT

    @pytest.mark.asyncio
    async def test_api_error_maps_to_action(self) -> None:
        client = _client()
        client.get_profile.side_effect = ApiError(401, "UNAUTHENTICATED", "Authentication required")
        reconciler = StatusReconciler(client, ProfileCache(), "alice")

        result = await reconciler.reconcile("/dashboard")

        assert result.status is None
        assert result.action is UiAction.LOGIN_REDIRECT


class _FakeServer:
    """In-memory stand-in for the profile endpoints of one caller."""

    def __init__(self) -> None:
        self.profile: ProfileResponse | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/settings/approval-mode"):
            return httpx.Response(200, json={"strict": False, "enforcement": "advisory"})
        if path.endswith("/profile") and request.method == "POST":
            self.profile = _profile(approved=False)
            return httpx.Response(201, json=self.profile.model_dump(mode="json", by_alias=True))
        if path.endswith("/admin/profiles/alice"):
            assert self.profile is not None
            self.profile = _profile(approved=True)
            return httpx.Response(200, json=self.profile.model_dump(mode="json", by_alias=True))
        if path.endswith("/profile"):
            body = None if self.profile is None else self.profile.model_dump(mode="json", by_alias=True)
            return httpx.Response(200, json=body)
        return httpx.Response(404, json={"code": "NOT_FOUND", "message": "Not found"})


class TestReconcileAfterMutation:
    @pytest.mark.asyncio
    async def test_create_through_client_rederives(self) -> None:
        cache = ProfileCache()
        transport = httpx.MockTransport(_FakeServer())
        async with RoleGateClient(
            "http://rolegate.test", "tok", transport=transport, cache=cache, identity="alice"
        ) as client:
            reconciler = StatusReconciler(client, cache, "alice")
            assert (await reconciler.reconcile("/dashboard")).action is UiAction.COMPLETION_PROMPT

            await client.create_profile("Alice", 1, 2)

            result = await reconciler.reconcile("/dashboard")

        assert result.status == UNAPPROVED
        assert result.action is UiAction.APPROVAL_BANNER

    @pytest.mark.asyncio
    async def test_review_invalidates_reviewed_identity(self) -> None:
        cache = ProfileCache()
        server = _FakeServer()
        server.profile = _profile(approved=False)
        transport = httpx.MockTransport(server)
        async with RoleGateClient(
            "http://rolegate.test", "tok", transport=transport, cache=cache, identity="alice"
        ) as client:
            reconciler = StatusReconciler(client, cache, "alice")
            assert (await reconciler.reconcile("/dashboard")).status == UNAPPROVED

            await client.review_profile("alice", approved=True)

            assert not cache.has("alice")
            result = await reconciler.reconcile("/dashboard")

        assert result.status == APPROVED
        assert result.action is UiAction.NONE

    @pytest.mark.asyncio
    async def test_failed_mutation_keeps_snapshot(self) -> None:
        cache = ProfileCache()

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "PATCH":
                return httpx.Response(400, json={"code": "VALIDATION_ERROR", "message": "No fields"})
            return httpx.Response(200, json=None)

        async with RoleGateClient(
            "http://rolegate.test", "tok", transport=httpx.MockTransport(handler), cache=cache, identity="alice"
        ) as client:
            await cache.get("alice", client.get_profile)
            with pytest.raises(ApiError):
                await client.update_profile()

        assert cache.has("alice")
