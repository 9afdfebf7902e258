"""Mint a development session token."""

from datetime import timedelta

from rolegate.cli.console import get_console
from rolegate.config import Config
from rolegate.domain.auth.service.token import TokenService


def token(
    user_id: str,
    email: str | None = None,
    minutes: int | None = None,
) -> None:
    """Print a session token signed with the configured secret.

    Only for local development; production tokens come from the identity provider.

    Args:
        user_id: Subject of the token.
        email: Optional email claim.
        minutes: Lifetime override in minutes.
    """
    console = get_console()
    config = Config()  # type: ignore[call-arg]
    if not config.auth.jwt.secret:
        console.error("No JWT secret configured", hint="Set ROLEGATE_AUTH__JWT__SECRET")
        raise SystemExit(1)

    service = TokenService(_config=config.auth.jwt)
    expires_in = timedelta(minutes=minutes) if minutes else None
    console.print(service.create_access_token(user_id, email=email, expires_in=expires_in), soft_wrap=True)
