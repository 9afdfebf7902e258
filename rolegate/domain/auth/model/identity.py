"""Identity hierarchy: base types for all request identities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Base for all request identities."""

    pass


@dataclass(frozen=True)
class Anonymous(Identity):
    """Request without a valid session."""

    pass


@dataclass(frozen=True)
class Principal(Identity):
    """Session subject authenticated by the external identity provider.

    Carries no roles: privileges come from the Profile bound to ``user_id``.
    """

    user_id: str
    email: str | None = None
