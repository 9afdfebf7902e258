"""Token service for session JWT validation."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from rolegate.config import JwtConfig
from rolegate.domain.auth.model.identity import Anonymous, Identity, Principal
from rolegate.domain.shared.service import Service

logger = logging.getLogger(__name__)


class TokenService(Service):
    """Service for session access tokens.

    Tokens are minted by the external identity provider (HS256, audience
    ``authenticated``); this service only verifies them. ``create_access_token``
    exists for local development and tests.
    """

    _config: JwtConfig

    def create_access_token(
        self,
        user_id: str,
        email: str | None = None,
        additional_claims: dict[str, Any] | None = None,
        expires_in: timedelta | None = None,
    ) -> str:
        """Create a JWT access token.

        Args:
            user_id: The identity provider's subject id
            email: Optional email claim
            additional_claims: Optional extra claims to include
            expires_in: Override for the configured lifetime

        Returns:
            Encoded JWT string
        """
        now = datetime.now(UTC)
        lifetime = expires_in or timedelta(minutes=self._config.access_token_expire_minutes)

        payload: dict[str, Any] = {
            "sub": user_id,
            "aud": self._config.audience,
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
            "jti": secrets.token_hex(16),
        }
        if email:
            payload["email"] = email
        if additional_claims:
            payload.update(additional_claims)

        return jwt.encode(
            payload,
            self._config.secret,
            algorithm=self._config.algorithm,
        )

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Validate and decode a JWT access token.

        Raises:
            jwt.InvalidTokenError: If token is invalid or expired
        """
        return jwt.decode(
            token,
            self._config.secret,
            algorithms=[self._config.algorithm],
            audience=self._config.audience,
            options={"require": ["sub", "exp"]},
        )

    def identify(self, token: str | None) -> Identity:
        """Resolve a request identity from a raw token.

        Returns Anonymous for a missing, expired or invalid token; never raises.
        """
        if not token:
            return Anonymous()

        try:
            payload = self.validate_access_token(token)
        except jwt.ExpiredSignatureError:
            logger.debug("Session token expired")
            return Anonymous()
        except jwt.InvalidTokenError as e:
            logger.debug("Session token rejected: %s", e)
            return Anonymous()

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            return Anonymous()
        return Principal(user_id=subject, email=payload.get("email"))
