"""UpdateProfile command: self-service edit of the caller's own profile."""

from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.service.gatekeeper import Gatekeeper
from rolegate.domain.profile.model.profile import ProfileChanges
from rolegate.domain.profile.query.view import ProfileView
from rolegate.domain.profile.service.profile import ProfileService
from rolegate.domain.shared.authorization.policy import SELF_SERVICE_PROFILE
from rolegate.domain.shared.command import Command, CommandHandler, Result


class UpdateProfile(Command):
    changes: ProfileChanges


class ProfileUpdated(Result):
    profile: ProfileView
    approval_revoked: bool


class UpdateProfileHandler(CommandHandler[UpdateProfile, ProfileUpdated]):
    __auth__ = SELF_SERVICE_PROFILE
    identity: Identity
    gatekeeper: Gatekeeper
    profile_service: ProfileService

    async def run(self, cmd: UpdateProfile) -> ProfileUpdated:
        # Always the caller's own record: the target is never taken from input
        user_id = self.access.identity.user_id
        was_approved = self.access.profile is not None and self.access.profile.approved

        profile = await self.profile_service.update_own(user_id, cmd.changes)
        self.gatekeeper.forget(user_id)
        return ProfileUpdated(
            profile=ProfileView.from_entity(profile),
            approval_revoked=was_approved and not profile.approved,
        )
