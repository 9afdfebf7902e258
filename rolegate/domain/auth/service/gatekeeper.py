"""Gatekeeper: binds the decision function to the profile store for one request."""

import logging

from rolegate.config import ApprovalConfig
from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.profile.model.profile import Profile
from rolegate.domain.profile.port.repository import ProfileRepository
from rolegate.domain.shared.authorization.decision import Decision
from rolegate.domain.shared.authorization.gate import authorize
from rolegate.domain.shared.authorization.policy import AccessPolicy
from rolegate.domain.shared.service import Service

logger = logging.getLogger(__name__)

_MISSING = object()


class Gatekeeper(Service):
    """Request-scoped access decisions.

    The profile lookup is memoized per user id for the lifetime of the
    instance (one unit of work), so a handler chain never hits the store
    twice for the same caller.
    """

    profile_repo: ProfileRepository
    approval: ApprovalConfig

    def __post_init__(self) -> None:
        self._profiles: dict[str, Profile | None] = {}

    async def lookup(self, user_id: str) -> Profile | None:
        cached = self._profiles.get(user_id, _MISSING)
        if cached is not _MISSING:
            return cached  # type: ignore[return-value]
        profile = await self.profile_repo.get_by_user_id(user_id)
        self._profiles[user_id] = profile
        return profile

    def forget(self, user_id: str) -> None:
        """Drop the memoized profile after it was written."""
        self._profiles.pop(user_id, None)

    async def decide(self, identity: Identity, policy: AccessPolicy) -> Decision:
        # Enforcement is read per decision so a config change is never served stale
        return await authorize(
            identity,
            policy,
            self.lookup,
            enforcement=self.approval.enforcement,
        )
