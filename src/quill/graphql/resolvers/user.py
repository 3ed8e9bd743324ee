from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from ...auth.passwords import hash_password
from ...database.connection import get_async_session
from ...dbmodels import Users
from ...logging import get_logger
from ..access_control import (
    UserOrderBy,
    get_auth_context_from_info,
    get_viewer_id,
    parse_id,
    require_user_id,
    validate_pagination,
)
from .auth import EMAIL_TAKEN, normalize_email

if TYPE_CHECKING:
    from ..mutations.root import UpdateUserInput
    from ..types.post import Post
    from ..types.user import User

logger = get_logger(__name__)

_USER_ORDERING = {
    UserOrderBy.CREATED_ASC: (Users.created_at.asc(), Users.id.asc()),
    UserOrderBy.CREATED_DESC: (Users.created_at.desc(), Users.id.desc()),
    UserOrderBy.UPDATED_ASC: (Users.updated_at.asc(), Users.id.asc()),
    UserOrderBy.UPDATED_DESC: (Users.updated_at.desc(), Users.id.desc()),
    UserOrderBy.NAME_ASC: (Users.name.asc(), Users.id.asc()),
    UserOrderBy.NAME_DESC: (Users.name.desc(), Users.id.desc()),
}


# Query resolvers
async def resolve_users(
    info: strawberry.Info,
    query: str | None,
    first: int | None,
    skip: int | None,
    order_by: UserOrderBy = UserOrderBy.CREATED_ASC,
) -> list[User]:
    """
    Resolve public author profiles.

    Args:
        query: Case-insensitive substring of the user's name
        first: Page size
        skip: Number of rows to skip
        order_by: Sort order for results
    """
    # A bad token fails the request even though the listing is public
    await get_auth_context_from_info(info)
    first, skip = validate_pagination(first, skip)

    stmt = select(Users)
    if query:
        stmt = stmt.where(Users.name.icontains(query, autoescape=True))
    stmt = stmt.order_by(*_USER_ORDERING[order_by]).offset(skip)
    if first is not None:
        stmt = stmt.limit(first)

    async with get_async_session() as session:
        result = await session.execute(stmt)
        users = result.scalars().all()

    from ..types.user import User as UserType

    return [UserType.from_model(user) for user in users]


# Field resolvers
async def resolve_user_email(user: User, info: strawberry.Info) -> str | None:
    """Only the user themself may read their email."""
    viewer_id = await get_viewer_id(info)
    if viewer_id is not None and parse_id(user.id) == viewer_id:
        return user.stored_email
    return None


async def resolve_user_posts(user: User, info: strawberry.Info) -> list[Post]:
    """Resolve the published posts of a user through the request's loader."""
    user_id = parse_id(user.id)
    if user_id is None:
        return []

    posts = await info.context["loaders"].published_posts_loader.load(user_id)

    from ..types.post import Post as PostType

    return [PostType.from_model(post) for post in posts]


# Mutation resolvers
async def update_user(info: strawberry.Info, data: UpdateUserInput) -> User:
    """
    Update the authenticated user's profile.

    A new password goes through the same policy and hashing as signup.
    """
    user_id = await require_user_id(info)

    async with get_async_session() as session:
        user = await session.get(Users, user_id)
        if user is None:
            raise RuntimeError("User not found")

        if data.name is not None:
            user.name = data.name
        if data.email is not None:
            email = normalize_email(data.email)
            if email != user.email:
                taken = await session.scalar(
                    select(Users.id).where(Users.email == email, Users.id != user_id)
                )
                if taken is not None:
                    raise RuntimeError(EMAIL_TAKEN)
                user.email = email
        if data.password is not None:
            user.password = hash_password(data.password)

        try:
            await session.flush()
        except IntegrityError as e:
            raise RuntimeError(EMAIL_TAKEN) from e

        logger.info(
            "User updated",
            user_id=str(user_id),
            updated_fields=[
                k
                for k, v in {
                    "name": data.name,
                    "email": data.email,
                    "password": data.password,
                }.items()
                if v is not None
            ],
        )

    from ..types.user import User as UserType

    return UserType.from_model(user)


async def delete_user(info: strawberry.Info) -> User:
    """
    Delete the authenticated user together with their posts.
    """
    user_id = await require_user_id(info)

    async with get_async_session() as session:
        user = await session.get(Users, user_id)
        if user is None:
            raise RuntimeError("User not found")

        from ..types.user import User as UserType

        deleted = UserType.from_model(user)

        await session.delete(user)

    logger.info("User deleted", user_id=str(user_id))

    return deleted
