"""Startup validation for handler authorization declarations."""

import logging
from dataclasses import fields, is_dataclass

from rolegate.domain.shared.authorization.policy import AccessPolicy, Gate
from rolegate.domain.shared.command import CommandHandler
from rolegate.domain.shared.error import ConfigurationError
from rolegate.domain.shared.query import QueryHandler

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("identity", "gatekeeper")


def _check_handler_class(handler_cls: type) -> None:
    """Check a single handler class for a usable __auth__ declaration.

    Raises ConfigurationError if __auth__ is missing, is not a Gate, or is an
    AccessPolicy on a handler that cannot receive the caller identity.
    """
    auth_gate = getattr(handler_cls, "__auth__", None)
    if not isinstance(auth_gate, Gate):
        raise ConfigurationError(f"Handler {handler_cls.__name__} has no __auth__ declaration")

    if isinstance(auth_gate, AccessPolicy):
        declared = {f.name for f in fields(handler_cls)} if is_dataclass(handler_cls) else set()
        missing = [name for name in _REQUIRED_FIELDS if name not in declared]
        if missing:
            raise ConfigurationError(
                f"Handler {handler_cls.__name__} declares {auth_gate.name} "
                f"but is missing field(s): {', '.join(missing)}"
            )


def _all_subclasses(base: type) -> list[type]:
    found: list[type] = []
    for sub in base.__subclasses__():
        found.append(sub)
        found.extend(_all_subclasses(sub))
    return found


def validate_all_handlers(package: str = "rolegate") -> None:
    """Scan registered CommandHandler and QueryHandler subclasses defined under ``package``.

    Raises ConfigurationError listing every handler with a bad declaration.
    """
    violations: list[str] = []

    for handler_cls in _all_subclasses(CommandHandler) + _all_subclasses(QueryHandler):
        if not handler_cls.__module__.startswith(f"{package}."):
            continue
        try:
            _check_handler_class(handler_cls)
        except ConfigurationError as e:
            violations.append(str(e))

    if violations:
        raise ConfigurationError(
            f"Authorization validation failed for {len(violations)} handler(s):\n"
            + "\n".join(f"  - {v}" for v in violations)
        )

    logger.info("Authorization startup validation passed for all handlers")
