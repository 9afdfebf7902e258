"""Tests for the member dashboard query."""

from unittest.mock import AsyncMock

import pytest

from rolegate.domain.auth.model.identity import Principal
from rolegate.domain.auth.model.role_level import RoleLevel
from rolegate.domain.profile.model.status import ProfileStatus
from rolegate.domain.profile.query.get_profile import GetDashboard, GetDashboardHandler
from rolegate.domain.shared.authorization.decision import AccessContext, Allow
from rolegate.domain.shared.error import ConfigurationError
from tests.unit.factories import make_profile

ALICE = Principal(user_id="user-1")


def _gatekeeper(profile) -> AsyncMock:
    gatekeeper = AsyncMock()
    gatekeeper.decide.return_value = Allow(
        AccessContext(
            identity=ALICE,
            profile=profile,
            role_level=profile.role_level if profile else RoleLevel.OPEN,
            department_id=profile.department_id if profile else None,
            status=ProfileStatus.derive(profile),
        )
    )
    return gatekeeper


class TestGetDashboard:
    @pytest.mark.asyncio
    async def test_sections_follow_level(self) -> None:
        profile = make_profile(user_id="user-1", level=RoleLevel.SENIOR)
        handler = GetDashboardHandler(identity=ALICE, gatekeeper=_gatekeeper(profile))

        dashboard = await handler.run(GetDashboard())

        assert [s.key for s in dashboard.sections] == ["overview", "caseload", "reviews"]

    @pytest.mark.asyncio
    async def test_allowed_without_profile_is_a_configuration_error(self) -> None:
        handler = GetDashboardHandler(identity=ALICE, gatekeeper=_gatekeeper(None))

        with pytest.raises(ConfigurationError):
            await handler.run(GetDashboard())
