from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from sqlalchemy import Select, or_, select

from ...database.connection import get_async_session
from ...dbmodels import Posts
from ...logging import get_logger
from ..access_control import (
    PostOrderBy,
    can_view_post,
    get_auth_context_from_info,
    get_viewer_id,
    is_post_author,
    parse_id,
    require_user_id,
    validate_pagination,
)

if TYPE_CHECKING:
    from ..mutations.root import CreatePostInput, UpdatePostInput
    from ..types.post import Post
    from ..types.user import User

logger = get_logger(__name__)

_POST_ORDERING = {
    PostOrderBy.CREATED_ASC: (Posts.created_at.asc(), Posts.id.asc()),
    PostOrderBy.CREATED_DESC: (Posts.created_at.desc(), Posts.id.desc()),
    PostOrderBy.UPDATED_ASC: (Posts.updated_at.asc(), Posts.id.asc()),
    PostOrderBy.UPDATED_DESC: (Posts.updated_at.desc(), Posts.id.desc()),
}


def _filtered_posts(
    stmt: Select,
    query: str | None,
    first: int | None,
    skip: int | None,
    order_by: PostOrderBy,
) -> Select:
    """Apply text search, ordering and pagination to a post query."""
    first, skip = validate_pagination(first, skip)

    if query:
        stmt = stmt.where(
            or_(
                Posts.title.icontains(query, autoescape=True),
                Posts.body.icontains(query, autoescape=True),
            )
        )
    stmt = stmt.order_by(*_POST_ORDERING[order_by]).offset(skip)
    if first is not None:
        stmt = stmt.limit(first)
    return stmt


async def _fetch_posts(stmt: Select) -> list[Post]:
    async with get_async_session() as session:
        result = await session.execute(stmt)
        posts = result.scalars().all()

    from ..types.post import Post as PostType

    return [PostType.from_model(post) for post in posts]


# Query resolvers
async def resolve_posts(
    info: strawberry.Info,
    query: str | None,
    first: int | None,
    skip: int | None,
    order_by: PostOrderBy = PostOrderBy.CREATED_ASC,
) -> list[Post]:
    """
    Resolve public posts. Drafts are never listed here, not even for their author.
    """
    await get_auth_context_from_info(info)
    stmt = select(Posts).where(Posts.published.is_(True))
    return await _fetch_posts(_filtered_posts(stmt, query, first, skip, order_by))


async def resolve_my_posts(
    info: strawberry.Info,
    query: str | None,
    first: int | None,
    skip: int | None,
    order_by: PostOrderBy = PostOrderBy.CREATED_ASC,
) -> list[Post]:
    """
    Resolve every post written by the authenticated user, drafts included.
    """
    user_id = await require_user_id(info)

    stmt = select(Posts).where(Posts.author_id == user_id)
    return await _fetch_posts(_filtered_posts(stmt, query, first, skip, order_by))


async def resolve_post_by_id(info: strawberry.Info, id: str) -> Post:
    """
    Resolve a single post.

    Published posts are visible to everyone, drafts only to their author.
    Anything else is reported as not found.
    """
    viewer_id = await get_viewer_id(info)
    post_id = parse_id(id)

    post = None
    if post_id is not None:
        async with get_async_session() as session:
            post = await session.get(Posts, post_id)

    if post is None or not can_view_post(post, viewer_id):
        logger.info("Post not found or not visible", post_id=str(id))
        raise RuntimeError("Post not found")

    from ..types.post import Post as PostType

    return PostType.from_model(post)


# Field resolvers
async def resolve_post_author(post: Post, info: strawberry.Info) -> User:
    """Resolve the author of a post through the request's loader."""
    author = await info.context["loaders"].user_loader.load(post.author_id)
    if author is None:
        raise RuntimeError("Post author not found")

    from ..types.user import User as UserType

    return UserType.from_model(author)


# Mutation resolvers
async def create_post(info: strawberry.Info, data: CreatePostInput) -> Post:
    """
    Create a new post.

    The authenticated user becomes the author of the post.
    """
    user_id = await require_user_id(info)

    async with get_async_session() as session:
        post = Posts(
            title=data.title,
            body=data.body,
            published=data.published,
            author_id=user_id,
        )
        session.add(post)
        await session.flush()

        logger.info(
            "Post created",
            post_id=str(post.id),
            user_id=str(user_id),
            published=post.published,
        )

    from ..types.post import Post as PostType

    return PostType.from_model(post)


async def _get_own_post(session, post_id: UUID | None, user_id: UUID) -> Posts | None:
    if post_id is None:
        return None
    post = await session.get(Posts, post_id)
    if post is None or not is_post_author(post, user_id):
        return None
    return post


async def update_post(info: strawberry.Info, id: str, data: UpdatePostInput) -> Post:
    """
    Update a post.

    Only the author can update a post.
    """
    user_id = await require_user_id(info)

    async with get_async_session() as session:
        post = await _get_own_post(session, parse_id(id), user_id)
        if post is None:
            logger.info("Post update refused", post_id=str(id), user_id=str(user_id))
            raise RuntimeError("Unable to update post")

        if data.title is not None:
            post.title = data.title
        if data.body is not None:
            post.body = data.body
        if data.published is not None:
            post.published = data.published

        await session.flush()

        logger.info(
            "Post updated",
            post_id=str(post.id),
            user_id=str(user_id),
            updated_fields=[
                k
                for k, v in {
                    "title": data.title,
                    "body": data.body,
                    "published": data.published,
                }.items()
                if v is not None
            ],
        )

    from ..types.post import Post as PostType

    return PostType.from_model(post)


async def delete_post(info: strawberry.Info, id: str) -> Post:
    """
    Delete a post and return its last state.

    Only the author can delete a post.
    """
    user_id = await require_user_id(info)

    async with get_async_session() as session:
        post = await _get_own_post(session, parse_id(id), user_id)
        if post is None:
            logger.info("Post delete refused", post_id=str(id), user_id=str(user_id))
            raise RuntimeError("Unable to delete post")

        from ..types.post import Post as PostType

        deleted = PostType.from_model(post)
        await session.delete(post)

    logger.info("Post deleted", post_id=str(deleted.id), user_id=str(user_id))

    return deleted
