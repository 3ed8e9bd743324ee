"""
Shared access control and argument handling for GraphQL resolvers
"""

from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

from ..auth.adapters.base import AuthenticationError
from ..auth.context import AuthContext
from ..auth.middleware import get_request_auth_context
from ..logging import get_logger

if TYPE_CHECKING:
    from ..dbmodels import Posts

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100
AUTHENTICATION_REQUIRED = "Authentication required"


@strawberry.enum
class PostOrderBy(Enum):
    """Sort order for post queries"""

    CREATED_ASC = "created_asc"
    CREATED_DESC = "created_desc"
    UPDATED_ASC = "updated_asc"
    UPDATED_DESC = "updated_desc"


@strawberry.enum
class UserOrderBy(Enum):
    """Sort order for user queries"""

    CREATED_ASC = "created_asc"
    CREATED_DESC = "created_desc"
    UPDATED_ASC = "updated_asc"
    UPDATED_DESC = "updated_desc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"


async def get_auth_context_from_info(info: strawberry.Info) -> AuthContext:
    """
    Resolve the auth context for the current GraphQL request.

    The result is cached on the context. Mutations that authenticate
    (signup, login) replace the cached value so nested fields see the new
    user.

    Raises:
        AuthenticationError: "Authentication required" if the request carries
            a malformed, expired or otherwise unusable token
    """
    cached = info.context.get("auth")
    if cached is not None:
        return cached

    request = info.context.get("request")
    if request is None:
        logger.error("Request not found in GraphQL context")
        auth_context = AuthContext.anonymous()
    else:
        try:
            auth_context = await get_request_auth_context(request)
        except AuthenticationError as e:
            logger.info("Rejected unusable credentials", reason=str(e))
            raise AuthenticationError(AUTHENTICATION_REQUIRED) from e

    info.context["auth"] = auth_context
    return auth_context


async def require_user_id(info: strawberry.Info) -> UUID:
    """Return the authenticated user's id or fail with 'Authentication required'."""
    auth_context = await get_auth_context_from_info(info)
    if not auth_context.is_authenticated or auth_context.user_id is None:
        raise AuthenticationError(AUTHENTICATION_REQUIRED)
    return auth_context.user_id


async def get_viewer_id(info: strawberry.Info) -> UUID | None:
    """Return the authenticated user's id, or None for anonymous requests."""
    auth_context = await get_auth_context_from_info(info)
    return auth_context.user_id if auth_context.is_authenticated else None


def set_viewer(info: strawberry.Info, user_id: UUID, token: str) -> None:
    """Treat the rest of this request as made by ``user_id`` (after signup or login)."""
    info.context["auth"] = AuthContext(
        user_id=user_id,
        principal={"provider": "jwt", "subject": str(user_id)},
        token=token,
    )


def parse_id(value: str) -> UUID | None:
    """Parse a GraphQL ID into a UUID; malformed ids resolve to None."""
    try:
        return UUID(str(value))
    except ValueError:
        return None


def validate_pagination(first: int | None, skip: int | None) -> tuple[int | None, int]:
    """Check ``first``/``skip`` arguments and return them normalised."""
    if first is not None and not 1 <= first <= MAX_PAGE_SIZE:
        raise ValueError(f"'first' must be between 1 and {MAX_PAGE_SIZE}")
    if skip is not None and skip < 0:
        raise ValueError("'skip' must not be negative")
    return first, skip or 0


def can_view_post(post: "Posts", viewer_id: UUID | None) -> bool:
    """
    Posts are visible when published, and drafts only to their author.
    """
    if post.published:
        return True
    return viewer_id is not None and post.author_id == viewer_id


def is_post_author(post: "Posts", viewer_id: UUID | None) -> bool:
    return viewer_id is not None and post.author_id == viewer_id
