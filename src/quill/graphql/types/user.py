"""
User GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Users
    from .post import Post


@strawberry.type
class User:
    """User type for GraphQL API. The email is only shown to the user themself."""

    id: strawberry.ID
    name: str
    created_at: datetime
    updated_at: datetime
    stored_email: strawberry.Private[str]

    @classmethod
    def from_model(cls, user: "Users") -> "User":
        return cls(
            id=strawberry.ID(str(user.id)),
            name=user.name,
            created_at=user.created_at,
            updated_at=user.updated_at,
            stored_email=user.email,
        )

    @strawberry.field
    async def email(self, info: strawberry.Info) -> str | None:
        """The user's email, or null when the requester is someone else."""
        from ..resolvers.user import resolve_user_email

        return await resolve_user_email(self, info)

    @strawberry.field
    async def posts(
        self, info: strawberry.Info
    ) -> list[Annotated["Post", strawberry.lazy(".post")]]:
        """Published posts written by this user."""
        from ..resolvers.user import resolve_user_posts

        return await resolve_user_posts(self, info)
