"""Profile reads: own profile, admin listing and the member dashboard."""

from pydantic import BaseModel

from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.role_level import RoleLevel, has_required_level
from rolegate.domain.auth.service.gatekeeper import Gatekeeper
from rolegate.domain.profile.model.status import ProfileState
from rolegate.domain.profile.query.view import ProfileView
from rolegate.domain.profile.service.profile import ProfileService
from rolegate.domain.shared.authorization.policy import ADMIN_ONLY, SELF_SERVICE_PROFILE, at_least
from rolegate.domain.shared.error import ConfigurationError
from rolegate.domain.shared.query import Query, QueryHandler, Result


class GetOwnProfile(Query):
    pass


class OwnProfile(Result):
    profile: ProfileView | None


class GetOwnProfileHandler(QueryHandler[GetOwnProfile, OwnProfile]):
    """Returns the caller's profile, or None when they have not created one yet."""

    __auth__ = SELF_SERVICE_PROFILE
    identity: Identity
    gatekeeper: Gatekeeper

    async def run(self, cmd: GetOwnProfile) -> OwnProfile:
        profile = self.access.profile
        return OwnProfile(profile=ProfileView.from_entity(profile) if profile else None)


class ListProfiles(Query):
    pending_only: bool = False


class ProfileList(Result):
    profiles: list[ProfileView]


class ListProfilesHandler(QueryHandler[ListProfiles, ProfileList]):
    __auth__ = ADMIN_ONLY
    identity: Identity
    gatekeeper: Gatekeeper
    profile_service: ProfileService

    async def run(self, cmd: ListProfiles) -> ProfileList:
        profiles = await self.profile_service.list_all()
        if cmd.pending_only:
            profiles = [p for p in profiles if p.state == ProfileState.COMPLETE_UNAPPROVED]
        return ProfileList(profiles=[ProfileView.from_entity(p) for p in profiles])


class GetDashboard(Query):
    pass


class DashboardSection(BaseModel):
    key: str
    title: str
    required_level: RoleLevel


# Sections of the member area and the level each one needs
SECTIONS: tuple[DashboardSection, ...] = (
    DashboardSection(key="overview", title="Overview", required_level=RoleLevel.ASSISTANT),
    DashboardSection(key="caseload", title="Caseload", required_level=RoleLevel.PROFESSIONAL),
    DashboardSection(key="reviews", title="Peer reviews", required_level=RoleLevel.SENIOR),
    DashboardSection(key="team", title="Team management", required_level=RoleLevel.MANAGER),
    DashboardSection(key="reports", title="Service reports", required_level=RoleLevel.EXECUTIVE),
    DashboardSection(key="admin", title="Administration", required_level=RoleLevel.SUPER_ADMIN),
)


class Dashboard(Result):
    user_id: str
    name: str | None
    role_level: RoleLevel
    level_label: str
    department_id: int | None
    department_name: str | None
    role_name: str | None
    approval_pending: bool
    sections: list[DashboardSection]


class GetDashboardHandler(QueryHandler[GetDashboard, Dashboard]):
    """Member landing page. Sections are filtered by the caller's level."""

    __auth__ = at_least(RoleLevel.ASSISTANT)
    identity: Identity
    gatekeeper: Gatekeeper

    async def run(self, cmd: GetDashboard) -> Dashboard:
        context = self.access
        profile = context.profile
        if profile is None:
            raise ConfigurationError(f"{type(self).__name__} allowed a caller without a profile")

        level = context.role_level
        visible = [s for s in SECTIONS if has_required_level(level, s.required_level)]
        return Dashboard(
            user_id=profile.user_id,
            name=profile.name,
            role_level=level,
            level_label=level.name,
            department_id=context.department_id,
            department_name=profile.department.name if profile.department else None,
            role_name=profile.role.name if profile.role else None,
            approval_pending=context.approval_pending,
            sections=visible,
        )
