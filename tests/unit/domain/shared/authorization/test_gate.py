"""Tests for authorize(): the single decision function behind both enforcement points."""

from unittest.mock import AsyncMock

import pytest

from rolegate.domain.auth.model.identity import Anonymous, Principal
from rolegate.domain.auth.model.role_level import RoleLevel
from rolegate.domain.shared.authorization.decision import (
    Allow,
    ApprovalEnforcement,
    Deny,
    Reason,
    RedirectRequired,
    RedirectTarget,
)
from rolegate.domain.shared.authorization.gate import authorize
from rolegate.domain.shared.authorization.policy import (
    ADMIN_ONLY,
    PROFILE_CREATION,
    SELF_SERVICE_PROFILE,
    SESSION_ONLY,
    AccessPolicy,
    at_least,
)
from tests.unit.factories import make_profile

ALICE = Principal(user_id="user-1")
STRICT = ApprovalEnforcement.STRICT
ADVISORY = ApprovalEnforcement.ADVISORY


def _lookup(profile):
    return AsyncMock(return_value=profile)


class TestSession:
    @pytest.mark.asyncio
    async def test_anonymous_is_denied_401(self) -> None:
        lookup = _lookup(None)

        decision = await authorize(Anonymous(), ADMIN_ONLY, lookup, enforcement=ADVISORY)

        assert decision == Deny(status=401, reason=Reason.UNAUTHENTICATED)
        lookup.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_session_only_redirects_to_login(self) -> None:
        decision = await authorize(Anonymous(), SESSION_ONLY, None, enforcement=ADVISORY)

        assert decision == RedirectRequired(target=RedirectTarget.LOGIN)

    @pytest.mark.asyncio
    async def test_profile_problems_deny_even_when_redirecting(self) -> None:
        policy = AccessPolicy(name="RedirectingMember", redirect_unauthenticated=True)

        decision = await authorize(ALICE, policy, _lookup(None), enforcement=STRICT)

        assert decision == Deny(status=403, reason=Reason.PROFILE_NOT_FOUND)
        assert list(RedirectTarget) == [RedirectTarget.LOGIN]

    @pytest.mark.asyncio
    async def test_session_only_skips_profile_lookup(self) -> None:
        decision = await authorize(ALICE, SESSION_ONLY, None, enforcement=STRICT)

        assert isinstance(decision, Allow)
        assert decision.context.profile is None

    @pytest.mark.asyncio
    async def test_profile_policy_without_lookup_is_a_programming_error(self) -> None:
        with pytest.raises(ValueError):
            await authorize(ALICE, ADMIN_ONLY, None, enforcement=STRICT)


class TestProfileChecks:
    @pytest.mark.asyncio
    async def test_missing_profile_is_denied(self) -> None:
        decision = await authorize(ALICE, at_least(RoleLevel.OPEN), _lookup(None), enforcement=ADVISORY)

        assert decision == Deny(status=403, reason=Reason.PROFILE_NOT_FOUND)

    @pytest.mark.asyncio
    async def test_creation_route_allows_missing_profile(self) -> None:
        decision = await authorize(ALICE, PROFILE_CREATION, _lookup(None), enforcement=STRICT)

        assert isinstance(decision, Allow)
        assert decision.context.role_level is RoleLevel.OPEN

    @pytest.mark.asyncio
    async def test_creation_route_lets_existing_unapproved_profile_through(self) -> None:
        profile = make_profile(approved=False)

        decision = await authorize(ALICE, PROFILE_CREATION, _lookup(profile), enforcement=STRICT)

        assert isinstance(decision, Allow)
        assert decision.context.profile is profile

    @pytest.mark.asyncio
    async def test_incomplete_profile_is_denied(self) -> None:
        profile = make_profile(name=None)

        decision = await authorize(ALICE, at_least(RoleLevel.OPEN), _lookup(profile), enforcement=ADVISORY)

        assert decision == Deny(status=403, reason=Reason.PROFILE_INCOMPLETE)

    @pytest.mark.asyncio
    async def test_self_service_tolerates_everything_but_the_session(self) -> None:
        for profile in (None, make_profile(name=None), make_profile(approved=False)):
            decision = await authorize(ALICE, SELF_SERVICE_PROFILE, _lookup(profile), enforcement=STRICT)
            assert isinstance(decision, Allow)
            assert not decision.degraded


class TestApproval:
    @pytest.mark.asyncio
    async def test_strict_mode_denies_unapproved(self) -> None:
        profile = make_profile(approved=False, level=RoleLevel.ASSISTANT)

        decision = await authorize(ALICE, at_least(RoleLevel.ASSISTANT), _lookup(profile), enforcement=STRICT)

        assert decision == Deny(status=403, reason=Reason.PROFILE_PENDING_APPROVAL)

    @pytest.mark.asyncio
    async def test_advisory_mode_allows_degraded(self) -> None:
        profile = make_profile(approved=False, level=RoleLevel.ASSISTANT)

        decision = await authorize(ALICE, at_least(RoleLevel.ASSISTANT), _lookup(profile), enforcement=ADVISORY)

        assert isinstance(decision, Allow)
        assert decision.degraded
        assert decision.context.approval_pending

    @pytest.mark.asyncio
    async def test_policy_pinned_enforcement_wins(self) -> None:
        policy = AccessPolicy(name="Pinned", approval_enforcement=STRICT)

        decision = await authorize(ALICE, policy, _lookup(make_profile(approved=False)), enforcement=ADVISORY)

        assert decision == Deny(status=403, reason=Reason.PROFILE_PENDING_APPROVAL)

    @pytest.mark.asyncio
    async def test_approval_is_checked_before_role(self) -> None:
        profile = make_profile(approved=False, level=RoleLevel.OPEN)

        decision = await authorize(ALICE, ADMIN_ONLY, _lookup(profile), enforcement=STRICT)

        assert decision.reason is Reason.PROFILE_PENDING_APPROVAL


class TestRoleLevel:
    @pytest.mark.asyncio
    async def test_insufficient_role(self) -> None:
        profile = make_profile(level=RoleLevel.PROFESSIONAL)

        decision = await authorize(ALICE, at_least(RoleLevel.MANAGER), _lookup(profile), enforcement=STRICT)

        assert decision == Deny(status=403, reason=Reason.INSUFFICIENT_ROLE)

    @pytest.mark.asyncio
    async def test_allow_carries_context(self) -> None:
        profile = make_profile(level=RoleLevel.MANAGER)

        decision = await authorize(ALICE, at_least(RoleLevel.SENIOR), _lookup(profile), enforcement=STRICT)

        assert isinstance(decision, Allow)
        assert decision.context.identity == ALICE
        assert decision.context.role_level is RoleLevel.MANAGER
        assert decision.context.department_id == 1
        assert not decision.degraded

    @pytest.mark.asyncio
    async def test_super_admin_passes_admin_only(self) -> None:
        profile = make_profile(level=RoleLevel.SUPER_ADMIN)

        decision = await authorize(ALICE, ADMIN_ONLY, _lookup(profile), enforcement=STRICT)

        assert isinstance(decision, Allow)

    @pytest.mark.asyncio
    async def test_gap_level_is_treated_as_open(self) -> None:
        profile = make_profile(level=7)

        decision = await authorize(ALICE, at_least(RoleLevel.ASSISTANT), _lookup(profile), enforcement=STRICT)

        assert decision == Deny(status=403, reason=Reason.INSUFFICIENT_ROLE)
