"""Custom Dishka scopes for RoleGate."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """RoleGate dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, config, singletons)
    - UOW: Unit of Work (one HTTP request or one CLI command)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
