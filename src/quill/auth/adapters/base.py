"""Base authentication adapter interface and types."""

from __future__ import annotations

from typing import Literal, NotRequired, Protocol, TypedDict
from uuid import UUID


class Principal(TypedDict):
    """Identity extracted from an incoming token."""

    provider: Literal["jwt"]
    subject: str  # local user id (sub)
    claims: NotRequired[dict]


class AuthAdapter(Protocol):
    """Token adapter interface used by the request auth layer."""

    async def verify_token(self, token: str) -> Principal:
        """
        Verify a token and return the principal identity.

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...

    async def issue_token(self, user_id: UUID, claims: dict | None = None) -> str:
        """
        Issue a new token for a local user.

        Args:
            user_id: User ID placed in the token subject
            claims: Optional additional claims to include

        Returns:
            Signed token string
        """
        ...


class AuthenticationError(Exception):
    """Raised when authentication fails."""

    pass
