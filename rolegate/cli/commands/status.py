"""Show the caller's profile status as the client would see it."""

import asyncio
import os

from rolegate.cli.console import get_console
from rolegate.client.api import ApiError, RoleGateClient
from rolegate.client.cache import ProfileCache
from rolegate.client.reconciler import Reconciliation, StatusReconciler

DEFAULT_URL = "http://127.0.0.1:8000"


def resolve_token(token: str | None) -> str | None:
    return token or os.environ.get("ROLEGATE_TOKEN")


async def _reconcile(url: str, token: str, path: str) -> Reconciliation:
    async with RoleGateClient(url, token) as client:
        reconciler = StatusReconciler(client, ProfileCache(), identity=token)
        return await reconciler.reconcile(path)


def status(
    url: str = DEFAULT_URL,
    token: str | None = None,
    path: str = "/dashboard",
) -> None:
    """Derive profile status and the UI action for a page.

    Args:
        url: Server base URL.
        token: Session token (defaults to $ROLEGATE_TOKEN).
        path: Page the user is on.
    """
    console = get_console()
    session = resolve_token(token)
    if not session:
        console.error("No session token", hint="Pass --token or set ROLEGATE_TOKEN")
        raise SystemExit(1)

    try:
        result = asyncio.run(_reconcile(url, session, path))
    except ApiError as e:
        console.denial(e.status, e.code, e.message)
        raise SystemExit(1) from e

    if result.status is None:
        console.warning(f"Profile could not be loaded; action: {result.action}")
        return

    console.panel(
        "\n".join(
            [
                f"State:       {console.state(result.status.state)}",
                f"Has profile: {result.status.has_profile}",
                f"Complete:    {result.status.is_complete}",
                f"Approved:    {result.status.is_approved}",
                f"UI action:   {result.action}",
            ]
        ),
        title=f"Profile status on {path}",
    )
