"""JWT authentication adapter for self-issued tokens."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError

from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)


class JWTAuthAdapter:
    """JWT authentication adapter for self-issued tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "quill",
        audience: str = "quill-api",
        token_expiry_days: int = 7,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.token_expiry_days = token_expiry_days

    def decode(self, token: str) -> dict:
        return jwt.decode(
            token,
            self.secret_key,
            algorithms=[self.algorithm],
            issuer=self.issuer,
            audience=self.audience,
            options={
                "verify_exp": True,
                "verify_nbf": True,
                "verify_iat": True,
                "require": ["sub", "exp"],
            },
        )

    async def verify_token(self, token: str) -> Principal:
        """Verify a JWT token and return the principal."""
        try:
            payload = self.decode(token)

            subject = payload.get("sub")
            if not subject:
                raise AuthenticationError("Missing 'sub' claim in token")

            return Principal(provider="jwt", subject=subject, claims=payload)

        except AuthenticationError:
            raise
        except InvalidTokenError as e:
            logger.warning("JWT token validation failed", error=str(e))
            raise AuthenticationError("Invalid token") from e

    async def issue_token(self, user_id: UUID, claims: dict | None = None) -> str:
        """Issue a new JWT token for the given user."""
        now = datetime.now(UTC)

        payload = {
            "sub": str(user_id),
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "nbf": now,
            "exp": now + timedelta(days=self.token_expiry_days),
        }

        if claims:
            payload.update(claims)

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
