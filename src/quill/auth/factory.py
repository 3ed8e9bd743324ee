"""Factory for creating the auth adapter from configuration."""

from __future__ import annotations

from uuid import UUID

from ..config import get_jwt_secret, settings
from .adapters.base import AuthAdapter
from .adapters.jwt import JWTAuthAdapter


def get_auth_adapter() -> AuthAdapter:
    """Create and return the configured auth adapter."""
    return JWTAuthAdapter(
        secret_key=get_jwt_secret(),
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        token_expiry_days=settings.token_expiry_days,
    )


_adapter: AuthAdapter | None = None


def get_auth_adapter_cached() -> AuthAdapter:
    """Get the process-wide auth adapter, building it from settings on first use."""
    global _adapter
    if _adapter is None:
        _adapter = get_auth_adapter()
    return _adapter


def reset_auth_adapter() -> None:
    """Forget the cached adapter so the next call reads settings again."""
    global _adapter
    _adapter = None


async def issue_user_token(user_id: UUID) -> str:
    """Sign a session token for a local user."""
    return await get_auth_adapter_cached().issue_token(user_id)
