"""
Root GraphQL query definitions
"""

import strawberry

from ..access_control import PostOrderBy, UserOrderBy
from ..types.post import Post
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def users(
        self,
        info: strawberry.Info,
        query: str | None = None,
        first: int | None = None,
        skip: int | None = 0,
        order_by: UserOrderBy | None = None,
    ) -> list[User]:
        """Get author profiles, optionally filtered by name."""
        from ..resolvers.user import resolve_users

        return await resolve_users(
            info, query, first, skip, order_by or UserOrderBy.CREATED_ASC
        )

    @strawberry.field
    async def posts(
        self,
        info: strawberry.Info,
        query: str | None = None,
        first: int | None = None,
        skip: int | None = 0,
        order_by: PostOrderBy | None = None,
    ) -> list[Post]:
        """Get published posts, optionally filtered by title or body."""
        from ..resolvers.post import resolve_posts

        return await resolve_posts(
            info, query, first, skip, order_by or PostOrderBy.CREATED_ASC
        )

    @strawberry.field
    async def my_posts(
        self,
        info: strawberry.Info,
        query: str | None = None,
        first: int | None = None,
        skip: int | None = 0,
        order_by: PostOrderBy | None = None,
    ) -> list[Post]:
        """Get all posts of the current user, drafts included."""
        from ..resolvers.post import resolve_my_posts

        return await resolve_my_posts(
            info, query, first, skip, order_by or PostOrderBy.CREATED_ASC
        )

    @strawberry.field
    async def post(self, info: strawberry.Info, id: strawberry.ID) -> Post:
        """Get a post by ID."""
        from ..resolvers.post import resolve_post_by_id

        return await resolve_post_by_id(info, id)

    @strawberry.field
    async def me(self, info: strawberry.Info) -> User:
        """Get the current authenticated user."""
        from ..resolvers.auth import resolve_current_user

        return await resolve_current_user(info)
