"""The authorization decision function.

Both enforcement points (edge interceptor and handler wrapper) call
``authorize()``; they differ only in the policy they pass.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from rolegate.domain.auth.model.identity import Principal
from rolegate.domain.auth.model.role_level import RoleLevel, has_required_level
from rolegate.domain.profile.model.status import ProfileStatus
from rolegate.domain.shared.authorization.decision import (
    AccessContext,
    Allow,
    ApprovalEnforcement,
    Decision,
    Deny,
    Reason,
    RedirectRequired,
    RedirectTarget,
)

if TYPE_CHECKING:
    from rolegate.domain.auth.model.identity import Identity
    from rolegate.domain.profile.model.profile import Profile
    from rolegate.domain.shared.authorization.policy import AccessPolicy

logger = logging.getLogger("rolegate.authz")

ProfileLookup = Callable[[str], Awaitable["Profile | None"]]


def _deny(principal: Identity, policy: AccessPolicy, status: int, reason: Reason) -> Deny:
    logger.warning(
        "Access denied: policy=%s, reason=%s, status=%d, user_id=%s",
        policy.name,
        reason,
        status,
        getattr(principal, "user_id", None),
    )
    return Deny(status=status, reason=reason)


async def authorize(
    identity: Identity,
    policy: AccessPolicy,
    profile_lookup: ProfileLookup | None,
    *,
    enforcement: ApprovalEnforcement,
) -> Decision:
    """Decide whether ``identity`` may proceed under ``policy``.

    Checks run in order and the first failure wins: session, profile
    existence, completeness, approval, role level.

    Args:
        identity: The request identity (Principal or Anonymous).
        policy: The declared policy of the operation.
        profile_lookup: Async callable returning the profile for a user id.
            Not called when the policy does not check profiles.
        enforcement: The global approval enforcement, used when the policy
            does not pin its own.
    """
    # 1. Session
    if not isinstance(identity, Principal):
        if policy.redirect_unauthenticated:
            logger.debug("No session for policy=%s, redirecting to login", policy.name)
            return RedirectRequired(target=RedirectTarget.LOGIN)
        return _deny(identity, policy, 401, Reason.UNAUTHENTICATED)

    if not policy.check_profile:
        return Allow(
            AccessContext(
                identity=identity,
                profile=None,
                role_level=RoleLevel.OPEN,
                department_id=None,
                status=ProfileStatus.derive(None),
            )
        )

    if profile_lookup is None:
        raise ValueError(f"Policy {policy.name} checks profiles but no lookup was given")

    # 2. Profile lookup
    profile = await profile_lookup(identity.user_id)
    status = ProfileStatus.derive(profile)
    role_level = RoleLevel.OPEN
    approval_pending = False

    # 3. Existence
    if profile is None:
        if not policy.tolerates_missing_profile:
            return _deny(identity, policy, 403, Reason.PROFILE_NOT_FOUND)
    else:
        role_level = profile.role_level

        # 4. Completeness
        if not status.is_complete and not policy.tolerates_missing_profile:
            return _deny(identity, policy, 403, Reason.PROFILE_INCOMPLETE)

        # 5. Approval
        if status.is_complete and not status.is_approved and not policy.tolerates_unapproved_profile:
            mode = policy.approval_enforcement or enforcement
            if mode == ApprovalEnforcement.STRICT:
                return _deny(identity, policy, 403, Reason.PROFILE_PENDING_APPROVAL)
            approval_pending = True
            logger.debug(
                "Profile pending approval (advisory): policy=%s, user_id=%s",
                policy.name,
                identity.user_id,
            )

    # 6. Role level
    if not has_required_level(role_level, policy.required_role):
        return _deny(identity, policy, 403, Reason.INSUFFICIENT_ROLE)

    # 7. Allow
    logger.debug(
        "Access allowed: policy=%s, user_id=%s, level=%s, state=%s",
        policy.name,
        identity.user_id,
        role_level.name,
        status.state,
    )
    return Allow(
        AccessContext(
            identity=identity,
            profile=profile,
            role_level=role_level,
            department_id=profile.department_id if profile is not None else None,
            status=status,
            approval_pending=approval_pending,
        )
    )
