"""
Reusable seed data functions for database initialization.

The fixture data seeded here is what the integration tests and local
development expect: one author with one published and one draft post.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.factory import issue_user_token
from ..auth.passwords import hash_password
from ..dbmodels import Posts, Users
from ..logging import get_logger

logger = get_logger(__name__)


@dataclass
class SeededUser:
    """A seeded user: the input it was created from, its id and a session token."""

    input: dict[str, str]
    id: UUID | None = None
    jwt: str | None = None

    @property
    def name(self) -> str:
        return self.input["name"]

    @property
    def email(self) -> str:
        return self.input["email"]

    @property
    def password(self) -> str:
        return self.input["password"]


@dataclass
class SeededPost:
    input: dict[str, str | bool]
    id: UUID | None = None

    @property
    def title(self) -> str:
        return str(self.input["title"])

    @property
    def body(self) -> str:
        return str(self.input["body"])

    @property
    def published(self) -> bool:
        return bool(self.input["published"])


@dataclass
class SeedData:
    user_one: SeededUser
    post_one: SeededPost
    post_two: SeededPost
    users: list[SeededUser] = field(default_factory=list)
    posts: list[SeededPost] = field(default_factory=list)


def default_seed() -> SeedData:
    """Build a fresh, not yet persisted, copy of the fixture data."""
    user_one = SeededUser(
        input={
            "name": "Alejandro Rodarte",
            "email": "alex@gmail.com",
            "password": "jesus123",
        }
    )
    post_one = SeededPost(
        input={
            "title": "Post 1 by Alejandro.",
            "body": "Body of post 1 by Alejandro.",
            "published": True,
        }
    )
    post_two = SeededPost(
        input={
            "title": "Post 2 by Alejandro.",
            "body": "Body of post 2 by Alejandro.",
            "published": False,
        }
    )
    return SeedData(
        user_one=user_one,
        post_one=post_one,
        post_two=post_two,
        users=[user_one],
        posts=[post_one, post_two],
    )


async def clear_database(db: AsyncSession) -> None:
    """Delete every post and user."""
    await db.execute(delete(Posts))
    await db.execute(delete(Users))
    await db.flush()


async def seed_database(db: AsyncSession) -> SeedData:
    """
    Reset the database to the fixture data.

    Wipes posts and users, then creates ``user_one`` with ``post_one``
    (published) and ``post_two`` (draft). The returned handles carry the
    persisted ids and a JWT for ``user_one``.

    Args:
        db: Database session (committed by the caller's session scope)

    Returns:
        SeedData with ids and tokens filled in
    """
    data = default_seed()

    await clear_database(db)

    user = Users(
        name=data.user_one.name,
        email=data.user_one.email,
        password=hash_password(data.user_one.password),
    )
    db.add(user)
    await db.flush()

    data.user_one.id = user.id
    data.user_one.jwt = await issue_user_token(user.id)

    # Flushed one at a time so creation order is stable
    for seeded_post in data.posts:
        post = Posts(
            title=seeded_post.title,
            body=seeded_post.body,
            published=seeded_post.published,
            author_id=user.id,
        )
        db.add(post)
        await db.flush()
        seeded_post.id = post.id

    logger.info(
        "Database seeded",
        users=len(data.users),
        posts=len(data.posts),
        user_one_id=str(data.user_one.id),
    )

    return data
