"""
Post GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Posts
    from .user import User


@strawberry.type
class Post:
    """Post type for GraphQL API."""

    id: strawberry.ID
    title: str
    body: str
    published: bool
    created_at: datetime
    updated_at: datetime
    author_id: strawberry.Private[UUID]

    @classmethod
    def from_model(cls, post: "Posts") -> "Post":
        return cls(
            id=strawberry.ID(str(post.id)),
            title=post.title,
            body=post.body,
            published=post.published,
            created_at=post.created_at,
            updated_at=post.updated_at,
            author_id=post.author_id,
        )

    @strawberry.field
    async def author(self, info: strawberry.Info) -> Annotated["User", strawberry.lazy(".user")]:
        """Get the author of this post."""
        from ..resolvers.post import resolve_post_author

        return await resolve_post_author(self, info)
