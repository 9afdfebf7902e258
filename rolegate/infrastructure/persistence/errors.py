"""Translation of driver-level store failures into RoleGate errors."""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import InterfaceError, OperationalError

from rolegate.domain.shared.error import StorageUnavailableError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def translate_store_errors(fn: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """Re-raise connection and operational failures as StorageUnavailableError.

    Integrity violations are not touched here; repositories turn those into
    ConflictError themselves.
    """

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await fn(*args, **kwargs)
        except (OperationalError, InterfaceError) as e:
            logger.error("Store failure in %s: %s", fn.__qualname__, e.orig)
            raise StorageUnavailableError(
                "The data store is unavailable",
                code="STORAGE_UNAVAILABLE",
            ) from e

    return wrapper
