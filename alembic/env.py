"""
Alembic environment for the Quill users/posts schema.

The target database comes from ``config.attributes["database_url"]`` when
``quill-migrate`` passes one, otherwise from QUILL_DATABASE_URL / settings.
"""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context  # type: ignore[reportMissingImports]
from quill.database.connection import get_database_url, to_async_url
from quill.dbmodels import target_metadata
from quill.logging import get_logger

config = context.config

# quill-migrate has already configured structlog
if config.config_file_name is not None and not config.attributes.get("logging_configured"):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

logger = get_logger("quill.migrations")

database_url: str = config.attributes.get("database_url") or get_database_url()


def include_object(obj, name, type_, reflected, compare_to) -> bool:
    """Leave tables that no Quill model declares out of autogenerate diffs."""
    return not (type_ == "table" and reflected and compare_to is None)


def configure_context(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        include_object=include_object,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the migration SQL for ``database_url`` without connecting."""
    configure_context(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=database_url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def migrate(connection: Connection) -> None:
    # SQLite cannot ALTER most constraints in place
    configure_context(connection=connection, render_as_batch=connection.dialect.name == "sqlite")

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(to_async_url(database_url), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(migrate)
    finally:
        await engine.dispose()

    logger.debug("Migrations applied", dialect=engine.dialect.name)


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
