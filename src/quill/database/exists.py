"""
Existence checks against the store, keyed by column equality.

    await exists_post(id=post_id, published=False)
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import Uuid, literal, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Base, Posts, Users
from .connection import get_async_session


def _where_clauses(model: type[Base], where: dict[str, Any]) -> list:
    columns = model.__table__.columns
    clauses = []
    for key, value in where.items():
        if key not in columns:
            raise ValueError(f"Unknown {model.__tablename__} field: {key}")
        column = columns[key]
        # GraphQL hands ids over as strings
        if isinstance(column.type, Uuid) and isinstance(value, str):
            value = UUID(value)
        clauses.append(column == value)
    return clauses


async def exists_row(
    model: type[Base], where: dict[str, Any], session: AsyncSession | None = None
) -> bool:
    """Return True if at least one row of ``model`` matches every condition in ``where``."""
    stmt = select(literal(1)).select_from(model).where(*_where_clauses(model, where)).limit(1)

    if session is not None:
        return await session.scalar(stmt) is not None

    async with get_async_session() as db:
        return await db.scalar(stmt) is not None


async def exists_user(session: AsyncSession | None = None, **where: Any) -> bool:
    return await exists_row(Users, where, session)


async def exists_post(session: AsyncSession | None = None, **where: Any) -> bool:
    return await exists_row(Posts, where, session)
