"""DI provider for auth domain."""

import logging

from dishka import from_context, provide
from starlette.requests import Request

from rolegate.config import Config
from rolegate.domain.auth.model.identity import Identity, Principal
from rolegate.domain.auth.service.gatekeeper import Gatekeeper
from rolegate.domain.auth.service.token import TokenService
from rolegate.domain.profile.port.repository import ProfileRepository
from rolegate.infrastructure.auth.session import session_token
from rolegate.util.di.base import Provider
from rolegate.util.di.scope import Scope

logger = logging.getLogger(__name__)


class AuthProvider(Provider):
    """DI provider for session identity and the request gatekeeper."""

    request = from_context(provides=Request, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_token_service(self, config: Config) -> TokenService:
        """Provide TokenService."""
        return TokenService(_config=config.auth.jwt)

    @provide(scope=Scope.UOW)
    def get_identity(
        self,
        request: Request,
        config: Config,
        token_service: TokenService,
    ) -> Identity:
        """Resolve Identity from the Bearer header or the session cookie.

        Returns Anonymous for unauthenticated requests, Principal for authenticated.
        """
        token = session_token(request.headers, request.cookies, config.auth.session_cookie)
        identity = token_service.identify(token)
        if isinstance(identity, Principal):
            logger.debug("Identity resolved: user_id=%s", identity.user_id)
        return identity

    @provide(scope=Scope.UOW)
    def get_gatekeeper(self, profile_repo: ProfileRepository, config: Config) -> Gatekeeper:
        """One gatekeeper per unit of work, so the profile lookup is memoized per request."""
        return Gatekeeper(profile_repo=profile_repo, approval=config.approval)
