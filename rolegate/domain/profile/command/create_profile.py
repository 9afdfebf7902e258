"""CreateProfile command: first profile of the calling identity."""

from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.service.gatekeeper import Gatekeeper
from rolegate.domain.profile.query.view import ProfileView
from rolegate.domain.profile.service.profile import ProfileService
from rolegate.domain.shared.authorization.policy import PROFILE_CREATION
from rolegate.domain.shared.command import Command, CommandHandler, Result


class CreateProfile(Command):
    name: str | None = None
    department_id: int | None = None
    role_id: int | None = None


class ProfileCreated(Result):
    profile: ProfileView


class CreateProfileHandler(CommandHandler[CreateProfile, ProfileCreated]):
    __auth__ = PROFILE_CREATION
    identity: Identity
    gatekeeper: Gatekeeper
    profile_service: ProfileService

    async def run(self, cmd: CreateProfile) -> ProfileCreated:
        user_id = self.access.identity.user_id
        profile = await self.profile_service.create(
            user_id=user_id,
            name=cmd.name,
            department_id=cmd.department_id,
            role_id=cmd.role_id,
        )
        self.gatekeeper.forget(user_id)
        return ProfileCreated(profile=ProfileView.from_entity(profile))
