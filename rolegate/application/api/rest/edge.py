"""Edge interceptor: session check in front of every non-public path.

Only the session is checked here (SESSION_ONLY). Profile, approval and role
rules are enforced by the handler wrapper behind it.
"""

import logging
from urllib.parse import quote

from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response
from starlette.types import ASGIApp, Receive, Scope, Send

from rolegate.config import Config
from rolegate.domain.auth.service.token import TokenService
from rolegate.domain.shared.authorization.decision import Allow
from rolegate.domain.shared.authorization.gate import authorize
from rolegate.domain.shared.authorization.policy import SESSION_ONLY
from rolegate.infrastructure.auth.session import session_token

logger = logging.getLogger(__name__)

_READ_METHODS = frozenset({"GET", "HEAD"})


def _matches(path: str, prefix: str) -> bool:
    if prefix.endswith("/"):
        return path.startswith(prefix) or path == prefix.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")


def is_public(path: str, method: str, config: Config) -> bool:
    """Whether a request may pass the edge without a session."""
    if any(_matches(path, prefix) for prefix in config.auth.public_paths):
        return True
    if method.upper() in _READ_METHODS:
        return any(_matches(path, prefix) for prefix in config.auth.public_read_paths)
    return False


class EdgeInterceptorMiddleware:
    """Pure ASGI middleware rejecting requests without a valid session."""

    def __init__(self, app: ASGIApp, config: Config) -> None:
        self.app = app
        self.config = config
        self.token_service = TokenService(_config=config.auth.jwt)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request = Request(scope)
        path = request.url.path
        if is_public(path, request.method, self.config):
            return await self.app(scope, receive, send)

        token = session_token(request.headers, request.cookies, self.config.auth.session_cookie)
        identity = self.token_service.identify(token)
        decision = await authorize(
            identity,
            SESSION_ONLY,
            None,
            enforcement=self.config.approval.enforcement,
        )
        if isinstance(decision, Allow):
            return await self.app(scope, receive, send)

        response = self._reject(request)
        await response(scope, receive, send)

    def _reject(self, request: Request) -> Response:
        path = request.url.path
        response: Response
        if path.startswith(self.config.server.api_prefix):
            logger.info("Edge rejected API request without session: %s %s", request.method, path)
            response = JSONResponse(
                status_code=401,
                content={"code": "UNAUTHENTICATED", "message": "Authentication required"},
                headers={"WWW-Authenticate": "Bearer"},
            )
        else:
            target = path + (f"?{request.url.query}" if request.url.query else "")
            location = f"{self.config.auth.login_path}?next={quote(target, safe='')}"
            logger.info("Edge redirecting to login: %s -> %s", path, location)
            response = RedirectResponse(url=location, status_code=307)

        # A stale or forged cookie must not survive the rejection
        for cookie in self.config.auth.session_cookies:
            response.delete_cookie(cookie, path="/")
        return response
