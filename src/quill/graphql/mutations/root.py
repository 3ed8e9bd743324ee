"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.auth import AuthPayload
from ..types.post import Post
from ..types.user import User


# Input types for mutations
@strawberry.input
class CreateUserInput:
    """Input for signing up."""

    name: str
    email: str
    password: str


@strawberry.input
class LoginUserInput:
    """Input for logging in."""

    email: str
    password: str


@strawberry.input
class UpdateUserInput:
    """Input for updating the current user."""

    name: str | None = None
    email: str | None = None
    password: str | None = None


@strawberry.input
class CreatePostInput:
    """Input for creating a new post."""

    title: str
    body: str
    published: bool


@strawberry.input
class UpdatePostInput:
    """Input for updating a post."""

    title: str | None = None
    body: str | None = None
    published: bool | None = None


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # User mutations
    @strawberry.mutation(name="createUser")
    async def create_user(self, info: strawberry.Info, data: CreateUserInput) -> AuthPayload:
        """Sign up a new user and return a session token."""
        from ..resolvers.auth import create_user

        return await create_user(info, data)

    @strawberry.mutation(name="login")
    async def login(self, info: strawberry.Info, data: LoginUserInput) -> AuthPayload:
        """Log in with email and password."""
        from ..resolvers.auth import login

        return await login(info, data)

    @strawberry.mutation(name="updateUser")
    async def update_user(self, info: strawberry.Info, data: UpdateUserInput) -> User:
        """Update the current user."""
        from ..resolvers.user import update_user

        return await update_user(info, data)

    @strawberry.mutation(name="deleteUser")
    async def delete_user(self, info: strawberry.Info) -> User:
        """Delete the current user and their posts."""
        from ..resolvers.user import delete_user

        return await delete_user(info)

    # Post mutations
    @strawberry.mutation(name="createPost")
    async def create_post(self, info: strawberry.Info, data: CreatePostInput) -> Post:
        """Create a new post."""
        from ..resolvers.post import create_post

        return await create_post(info, data)

    @strawberry.mutation(name="updatePost")
    async def update_post(
        self, info: strawberry.Info, id: strawberry.ID, data: UpdatePostInput
    ) -> Post:
        """Update one of the current user's posts."""
        from ..resolvers.post import update_post

        return await update_post(info, id, data)

    @strawberry.mutation(name="deletePost")
    async def delete_post(self, info: strawberry.Info, id: strawberry.ID) -> Post:
        """Delete one of the current user's posts."""
        from ..resolvers.post import delete_post

        return await delete_post(info, id)
