"""Outcomes of an authorization decision."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rolegate.domain.auth.model.identity import Principal
    from rolegate.domain.auth.model.role_level import RoleLevel
    from rolegate.domain.profile.model.profile import Profile
    from rolegate.domain.profile.model.status import ProfileStatus


class Reason(StrEnum):
    """Stable machine-readable denial reasons."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    PROFILE_INCOMPLETE = "PROFILE_INCOMPLETE"
    PROFILE_PENDING_APPROVAL = "PROFILE_PENDING_APPROVAL"
    INSUFFICIENT_ROLE = "INSUFFICIENT_ROLE"


class RedirectTarget(StrEnum):
    """Where a caller has to go before it can proceed."""

    LOGIN = "LOGIN"


class ApprovalEnforcement(StrEnum):
    """How an unapproved (but complete) profile is treated."""

    STRICT = "strict"  # hard deny
    ADVISORY = "advisory"  # allow, flagged as pending


@dataclass(frozen=True)
class AccessContext:
    """Resolved caller context handed to an operation after the gate allows it."""

    identity: Principal
    profile: Profile | None
    role_level: RoleLevel
    department_id: int | None
    status: ProfileStatus
    approval_pending: bool = False


@dataclass(frozen=True)
class Allow:
    context: AccessContext

    @property
    def degraded(self) -> bool:
        """Allowed in advisory mode while approval is still pending."""
        return self.context.approval_pending


@dataclass(frozen=True)
class Deny:
    status: int
    reason: Reason


@dataclass(frozen=True)
class RedirectRequired:
    target: RedirectTarget


Decision = Allow | Deny | RedirectRequired
