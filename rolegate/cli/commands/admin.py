"""Administrative commands: profile review against a running server."""

import asyncio
from typing import Any

import cyclopts

from rolegate.cli.commands.status import DEFAULT_URL, resolve_token
from rolegate.cli.console import get_console
from rolegate.client.api import ApiError, RoleGateClient

app = cyclopts.App(name="admin", help="Administrative commands (SUPER_ADMIN session required)")


def _session(token: str | None) -> str:
    session = resolve_token(token)
    if not session:
        get_console().error("No session token", hint="Pass --token or set ROLEGATE_TOKEN")
        raise SystemExit(1)
    return session


def _run(coro: Any) -> Any:
    try:
        return asyncio.run(coro)
    except ApiError as e:
        get_console().denial(e.status, e.code, e.message)
        raise SystemExit(1) from e


async def _list(url: str, token: str, pending: bool):
    async with RoleGateClient(url, token) as client:
        return await client.list_profiles(pending_only=pending)


async def _review(url: str, token: str, user_id: str, approved: bool):
    async with RoleGateClient(url, token) as client:
        return await client.review_profile(user_id, approved=approved)


@app.command
def profiles(
    url: str = DEFAULT_URL,
    token: str | None = None,
    pending: bool = False,
) -> None:
    """List profiles.

    Args:
        url: Server base URL.
        token: Session token (defaults to $ROLEGATE_TOKEN).
        pending: Only complete profiles awaiting approval.
    """
    rows = _run(_list(url, _session(token), pending))
    get_console().table(
        [
            {
                "user_id": p.user_id,
                "name": p.name or "",
                "department": p.department.name if p.department else "",
                "role": p.role.name if p.role else "",
                "state": p.state,
            }
            for p in rows
        ],
        [("user_id", "User"), ("name", "Name"), ("department", "Department"), ("role", "Role"), ("state", "State")],
        title="Profiles",
    )


@app.command
def approve(user_id: str, url: str = DEFAULT_URL, token: str | None = None) -> None:
    """Approve a complete profile.

    Args:
        user_id: Identity of the profile owner.
        url: Server base URL.
        token: Session token (defaults to $ROLEGATE_TOKEN).
    """
    profile = _run(_review(url, _session(token), user_id, True))
    get_console().success(f"Approved {profile.user_id} ({profile.state})")


@app.command
def revoke(user_id: str, url: str = DEFAULT_URL, token: str | None = None) -> None:
    """Revoke a profile's approval.

    Args:
        user_id: Identity of the profile owner.
        url: Server base URL.
        token: Session token (defaults to $ROLEGATE_TOKEN).
    """
    profile = _run(_review(url, _session(token), user_id, False))
    get_console().success(f"Revoked approval of {profile.user_id} ({profile.state})")
