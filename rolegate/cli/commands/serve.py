"""Run the API server."""

import logfire
import uvicorn

from rolegate.cli.console import get_console
from rolegate.config import Config


def serve(
    host: str = "127.0.0.1",
    port: int = 8000,
    reload: bool = False,
) -> None:
    """Start the RoleGate API server in the foreground.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        reload: Restart on code changes (development).
    """
    console = get_console()
    config = Config()  # type: ignore[call-arg]

    if not config.auth.jwt.secret:
        console.warning("ROLEGATE_AUTH__JWT__SECRET is not set; every session will be rejected")

    # Must run before the app module is imported
    logfire.configure(send_to_logfire="if-token-present", service_name=config.server.name.lower())

    console.success(f"Serving {config.server.name} on http://{host}:{port}{config.server.api_prefix}")
    console.info(f"Approval enforcement: {config.approval.enforcement}")
    uvicorn.run(
        "rolegate.application.api.rest.app:app",
        host=host,
        port=port,
        reload=reload,
        access_log=True,
    )
