"""Handler-boundary enforcement of ``__auth__`` declarations."""

import logging
from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any

from rolegate.domain.shared.authorization.decision import Allow, Deny, Reason, RedirectRequired
from rolegate.domain.shared.authorization.policy import AccessPolicy, Gate, Public
from rolegate.domain.shared.error import AuthenticationError, AuthorizationError, ConfigurationError

logger = logging.getLogger("rolegate.authz")

# Unbound async handler method: (self, cmd) -> Coroutine -> Result
HandlerMethod = Callable[..., Coroutine[Any, Any, Any]]

DENIAL_MESSAGES: dict[Reason, str] = {
    Reason.UNAUTHENTICATED: "Authentication required",
    Reason.PROFILE_NOT_FOUND: "Profile not found. Please complete your profile.",
    Reason.PROFILE_INCOMPLETE: "Profile incomplete. Please complete your profile.",
    Reason.PROFILE_PENDING_APPROVAL: "Profile pending approval",
    Reason.INSUFFICIENT_ROLE: "Insufficient role for this operation",
}


def denial_error(decision: Deny | RedirectRequired) -> AuthenticationError | AuthorizationError:
    """Translate a non-allow decision into the error the API surfaces."""
    if isinstance(decision, RedirectRequired):
        return AuthenticationError()
    message = DENIAL_MESSAGES[decision.reason]
    if decision.status == 401:
        return AuthenticationError(message, code=decision.reason.value)
    return AuthorizationError(message, code=decision.reason.value)


def wrap_run_with_auth(cls: type, original_run: HandlerMethod) -> HandlerMethod:
    """Wrap the run() method with __auth__ gate evaluation."""

    @wraps(original_run)
    async def auth_wrapped_run(self: Any, cmd: Any) -> Any:
        auth_gate = getattr(type(self), "__auth__", None)

        if not isinstance(auth_gate, Gate):
            raise ConfigurationError(f"Handler {type(self).__name__} has no __auth__ declaration")

        if isinstance(auth_gate, Public):
            return await original_run(self, cmd)

        if isinstance(auth_gate, AccessPolicy):
            gatekeeper = getattr(self, "gatekeeper", None)
            if gatekeeper is None or not hasattr(self, "identity"):
                raise ConfigurationError(
                    f"Handler {type(self).__name__} declares {auth_gate.name} "
                    f"but has no identity/gatekeeper fields"
                )

            decision = await gatekeeper.decide(self.identity, auth_gate)
            if not isinstance(decision, Allow):
                raise denial_error(decision)

            logger.debug(
                "Handler allowed: handler=%s, policy=%s, degraded=%s",
                type(self).__name__,
                auth_gate.name,
                decision.degraded,
            )
            self._access = decision.context
            return await original_run(self, cmd)

        raise ConfigurationError(  # pragma: no cover
            f"Handler {type(self).__name__} has unhandled __auth__ type: {type(auth_gate).__name__}"
        )

    return auth_wrapped_run


class GuardedHandler:
    """Mixin exposing the access context resolved by the gate."""

    @property
    def access(self):
        """The AccessContext of the current run. Only set for AccessPolicy handlers."""
        context = getattr(self, "_access", None)
        if context is None:
            raise ConfigurationError(f"Handler {type(self).__name__} has no resolved access context")
        return context

    @property
    def approval_pending(self) -> bool:
        context = getattr(self, "_access", None)
        return context is not None and context.approval_pending
