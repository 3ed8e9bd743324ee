"""Request authentication: turn an Authorization header into an AuthContext."""

from __future__ import annotations

from uuid import UUID

from starlette.requests import Request

from ..logging import bind_user_id, get_logger
from .adapters.base import AuthenticationError
from .context import AuthContext
from .factory import get_auth_adapter_cached

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


async def get_auth_context(authorization: str | None) -> AuthContext:
    """
    Extract authentication context from the Authorization header value.

    This function:
    1. Returns an anonymous context when no header is present
    2. Extracts the Bearer token
    3. Verifies the token with the configured adapter
    4. Returns an AuthContext carrying the local user id

    A present but unusable header is an error, never a silent downgrade
    to anonymous access.

    Raises:
        AuthenticationError: If the header is malformed or the token is invalid
    """
    if not authorization:
        return AuthContext.anonymous()

    if not authorization.startswith(BEARER_PREFIX):
        logger.warning("Invalid authorization format received")
        raise AuthenticationError("Invalid authorization format. Expected: Bearer <token>")

    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        logger.warning("Empty token provided")
        raise AuthenticationError("Empty token")

    adapter = get_auth_adapter_cached()
    principal = await adapter.verify_token(token)

    try:
        user_id = UUID(principal["subject"])
    except ValueError as e:
        logger.warning("Token subject is not a user id", subject=principal["subject"])
        raise AuthenticationError("Invalid token") from e

    bind_user_id(str(user_id))
    logger.debug("Request authenticated", user_id=str(user_id))

    return AuthContext(user_id=user_id, principal=principal, token=token)


async def authenticate_request(request: Request) -> AuthContext | AuthenticationError:
    """
    Verify the request's Authorization header and keep the outcome on ``request.state``.

    The outcome is either the AuthContext or the AuthenticationError that
    verification raised; later lookups reuse it instead of decoding again.
    """
    outcome: AuthContext | AuthenticationError
    try:
        outcome = await get_auth_context(request.headers.get("authorization"))
    except AuthenticationError as e:
        outcome = e
    request.state.auth_outcome = outcome
    return outcome


async def get_request_auth_context(request: Request) -> AuthContext:
    """
    Return the request's auth context, verifying the header on first use.

    Raises:
        AuthenticationError: If the request carries unusable credentials
    """
    outcome = getattr(request.state, "auth_outcome", None)
    if outcome is None:
        outcome = await authenticate_request(request)
    if isinstance(outcome, AuthenticationError):
        raise AuthenticationError(str(outcome))
    return outcome
