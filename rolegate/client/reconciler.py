"""Client-side mirror of the profile state machine.

Derives the same status the server gate derives (``ProfileStatus.derive``)
and turns it into a single UI action.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum

from rolegate.client.api import ApiError, RoleGateClient
from rolegate.client.cache import InvalidationTag, ProfileCache
from rolegate.domain.profile.model.status import ProfileState, ProfileStatus
from rolegate.domain.shared.authorization.decision import Reason

logger = logging.getLogger(__name__)

PROFILE_PAGE = "/profile"


class UiAction(StrEnum):
    NONE = "NONE"
    COMPLETION_PROMPT = "COMPLETION_PROMPT"  # blocking modal
    PENDING_APPROVAL_REDIRECT = "PENDING_APPROVAL_REDIRECT"  # strict mode
    APPROVAL_BANNER = "APPROVAL_BANNER"  # advisory mode, dismissible
    LOGIN_REDIRECT = "LOGIN_REDIRECT"
    PERMISSION_DENIED = "PERMISSION_DENIED"


def action_for_denial(status: int, code: str | None) -> UiAction:
    """Map a server denial to the UI action the reconciler would have chosen."""
    if status == 401:
        return UiAction.LOGIN_REDIRECT
    if status != 403:
        return UiAction.NONE
    match code:
        case Reason.PROFILE_NOT_FOUND | Reason.PROFILE_INCOMPLETE:
            return UiAction.COMPLETION_PROMPT
        case Reason.PROFILE_PENDING_APPROVAL:
            return UiAction.PENDING_APPROVAL_REDIRECT
        case Reason.INSUFFICIENT_ROLE:
            return UiAction.PERMISSION_DENIED
        case _:
            return UiAction.NONE


def decide_action(status: ProfileStatus, *, strict: bool, path: str, banner_dismissed: bool = False) -> UiAction:
    """Exactly one action for a derived status, in priority order."""
    on_profile_page = path.startswith(PROFILE_PAGE)

    # 1. Missing or incomplete profile
    if status.state in (ProfileState.NO_PROFILE, ProfileState.INCOMPLETE):
        return UiAction.NONE if on_profile_page else UiAction.COMPLETION_PROMPT

    # 2. Complete but unapproved
    if status.state == ProfileState.COMPLETE_UNAPPROVED:
        if strict:
            return UiAction.NONE if on_profile_page else UiAction.PENDING_APPROVAL_REDIRECT
        return UiAction.NONE if banner_dismissed else UiAction.APPROVAL_BANNER

    return UiAction.NONE


@dataclass(frozen=True)
class Reconciliation:
    status: ProfileStatus | None
    action: UiAction


class StatusReconciler:
    """Re-derives profile status for the signed-in identity on demand.

    Re-derivation is triggered by callers (navigation, identity events);
    nothing polls.
    """

    def __init__(self, client: RoleGateClient, cache: ProfileCache, identity: str) -> None:
        self.client = client
        self.cache = cache
        self.identity = identity
        self._strict: bool | None = None
        self._banner_dismissed = False
        cache.subscribe(self._on_invalidate)

    def _on_invalidate(self, tag: InvalidationTag, identity: str | None) -> None:
        if tag == InvalidationTag.SIGNED_OUT or identity is None or identity == self.identity:
            self._banner_dismissed = False
            self._strict = None

    async def _strict_mode(self) -> bool:
        if self._strict is None:
            self._strict = (await self.client.get_approval_mode()).strict
        return self._strict

    def dismiss_banner(self) -> None:
        """Hide the advisory banner until the next invalidation of this identity."""
        self._banner_dismissed = True

    async def reconcile(self, path: str = "/") -> Reconciliation:
        try:
            profile = await self.cache.get(self.identity, self.client.get_profile)
            strict = await self._strict_mode()
        except ApiError as e:
            action = action_for_denial(e.status, e.code)
            logger.warning("Profile status fetch failed (%s), action=%s", e, action)
            return Reconciliation(status=None, action=action)

        status = ProfileStatus.derive(profile)
        action = decide_action(status, strict=strict, path=path, banner_dismissed=self._banner_dismissed)
        logger.debug("Reconciled %s on %s: state=%s, action=%s", self.identity, path, status.state, action)
        return Reconciliation(status=status, action=action)
