"""Access policies declared on handlers via ``__auth__``.

Route code picks one of the named presets below. The raw flags on
AccessPolicy are what the gate evaluates; they are not meant to be combined
ad hoc at call sites.
"""

from __future__ import annotations

from dataclasses import dataclass

from rolegate.domain.auth.model.role_level import RoleLevel
from rolegate.domain.shared.authorization.decision import ApprovalEnforcement


class Gate:
    """Base for handler-level authorization declarations."""


@dataclass(frozen=True)
class Public(Gate):
    """No session required; the decision function is not consulted."""


@dataclass(frozen=True)
class AccessPolicy(Gate):
    """Flags evaluated by ``authorize()``.

    ``approval_enforcement=None`` follows the global strict-approval setting.
    ``check_profile=False`` stops after the session check (no store lookup).
    ``redirect_unauthenticated`` turns a missing session into a login redirect.
    """

    name: str
    required_role: RoleLevel = RoleLevel.OPEN
    allow_unapproved_profile: bool = False
    is_creation_route: bool = False
    skip_completion_check: bool = False
    skip_approval_check: bool = False
    approval_enforcement: ApprovalEnforcement | None = None
    check_profile: bool = True
    redirect_unauthenticated: bool = False

    @property
    def tolerates_missing_profile(self) -> bool:
        return self.is_creation_route or self.skip_completion_check

    @property
    def tolerates_unapproved_profile(self) -> bool:
        return self.allow_unapproved_profile or self.skip_approval_check


PUBLIC_READ = Public()

SESSION_ONLY = AccessPolicy(
    name="SessionOnly",
    check_profile=False,
    redirect_unauthenticated=True,
)

SELF_SERVICE_PROFILE = AccessPolicy(
    name="SelfServiceProfile",
    allow_unapproved_profile=True,
    skip_completion_check=True,
    skip_approval_check=True,
)

PROFILE_CREATION = AccessPolicy(
    name="ProfileCreation",
    is_creation_route=True,
    # An existing profile must reach the operation, which answers 409
    allow_unapproved_profile=True,
)

ADMIN_ONLY = AccessPolicy(
    name="AdminOnly",
    required_role=RoleLevel.SUPER_ADMIN,
)


def public() -> Public:
    """Mark a handler as publicly readable (no session required)."""
    return PUBLIC_READ


def at_least(level: RoleLevel) -> AccessPolicy:
    """Member route: complete, approved (per enforcement) profile with at least ``level``."""
    if level == RoleLevel.SUPER_ADMIN:
        return ADMIN_ONLY
    return AccessPolicy(name=f"AtLeast{level.name.title().replace('_', '')}", required_role=level)
