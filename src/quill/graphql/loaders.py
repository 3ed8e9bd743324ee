from collections import defaultdict
from uuid import UUID

from sqlalchemy import select
from strawberry.dataloader import DataLoader

from ..database.connection import get_async_session
from ..dbmodels import Posts, Users


async def load_users(keys: list[UUID]) -> list[Users | None]:
    """Batch load users by ID."""
    async with get_async_session() as session:
        stmt = select(Users).where(Users.id.in_(keys))
        result = await session.execute(stmt)
        users = result.scalars().all()
        users_map = {user.id: user for user in users}
        return [users_map.get(key) for key in keys]


async def load_published_posts_by_author(keys: list[UUID]) -> list[list[Posts]]:
    """Batch load each author's published posts, oldest first."""
    async with get_async_session() as session:
        stmt = (
            select(Posts)
            .where(Posts.author_id.in_(keys), Posts.published.is_(True))
            .order_by(Posts.created_at.asc(), Posts.id.asc())
        )
        result = await session.execute(stmt)
        posts_by_author: dict[UUID, list[Posts]] = defaultdict(list)
        for post in result.scalars().all():
            posts_by_author[post.author_id].append(post)
        return [posts_by_author.get(key, []) for key in keys]


class Loaders:
    def __init__(self):
        self.user_loader = DataLoader(load_fn=load_users)
        self.published_posts_loader = DataLoader(load_fn=load_published_posts_by_author)
