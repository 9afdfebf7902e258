"""ReviewProfile command: administrator approval and reassignment."""

from pydantic import Field

from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.service.gatekeeper import Gatekeeper
from rolegate.domain.profile.model.profile import ProfileChanges
from rolegate.domain.profile.query.view import ProfileView
from rolegate.domain.profile.service.profile import ProfileService
from rolegate.domain.shared.authorization.policy import ADMIN_ONLY
from rolegate.domain.shared.command import Command, CommandHandler, Result


class ReviewProfile(Command):
    user_id: str
    changes: ProfileChanges = Field(default_factory=ProfileChanges)
    approved: bool | None = None


class ProfileReviewed(Result):
    profile: ProfileView


class ReviewProfileHandler(CommandHandler[ReviewProfile, ProfileReviewed]):
    __auth__ = ADMIN_ONLY
    identity: Identity
    gatekeeper: Gatekeeper
    profile_service: ProfileService

    async def run(self, cmd: ReviewProfile) -> ProfileReviewed:
        profile = await self.profile_service.review(
            cmd.user_id,
            cmd.changes,
            approved=cmd.approved,
            reviewer_id=self.access.identity.user_id,
        )
        self.gatekeeper.forget(cmd.user_id)
        return ProfileReviewed(profile=ProfileView.from_entity(profile))
