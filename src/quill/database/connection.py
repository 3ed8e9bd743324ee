"""
Database connection management
"""

import os
import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ..config import settings
from ..logging import get_logger

logger = get_logger(__name__)

# Global shared connection pool
_async_engine: AsyncEngine | None = None
_async_session_local: async_sessionmaker[AsyncSession] | None = None
_initialized = False
_init_lock = threading.Lock()  # Protect initialization from race conditions


def get_database_url() -> str:
    """Get database URL, checking environment variables first for test compatibility."""
    return os.getenv("QUILL_DATABASE_URL") or settings.database_url


def to_async_url(database_url: str) -> str:
    """Map a plain driver URL onto its async driver."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


def reset_database() -> None:
    """Forget the shared engine (for tests). Call dispose_database() first to close it."""
    global _async_engine, _async_session_local, _initialized
    _async_engine = None
    _async_session_local = None
    _initialized = False


async def dispose_database() -> None:
    """Close pooled connections and reset the shared engine."""
    if _async_engine is not None:
        await _async_engine.dispose()
    reset_database()


async def check_database_connection() -> tuple[bool, str | None]:
    """
    Check the database connection and return a helpful error message on failure.

    Returns:
        tuple: (success: bool, error_message: str | None)
    """
    if _async_engine is None:
        return False, "Database engine not initialized"

    try:
        async with _async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            return True, None
    except Exception as e:
        error_str = str(e)

        if "Connection refused" in error_str or "could not connect" in error_str:
            return False, (
                f"Cannot connect to database server: {error_str}\n"
                f"The database server appears to be down or unreachable."
            )
        elif "password authentication failed" in error_str:
            return False, (
                f"Database authentication failed: {error_str}\n"
                f"Please check your database credentials."
            )
        elif "unable to open database file" in error_str:
            return False, (
                f"Cannot open SQLite database: {error_str}\n"
                f"Please check that the directory exists and is writable."
            )
        else:
            return False, f"Database connection error ({type(e).__name__}): {error_str}"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_database(database_url: str | None = None, force_reinit: bool = False) -> None:
    """Initialize the shared async database connection pool.

    Thread-safe initialization using a lock to prevent race conditions
    when multiple threads attempt to initialize simultaneously.
    """
    global _async_engine, _async_session_local, _initialized

    if _initialized and not force_reinit and database_url is None:
        return

    with _init_lock:
        if _initialized and not force_reinit and database_url is None:
            return

        db_url = to_async_url(database_url or get_database_url())

        engine_options: dict = {"echo": settings.sql_echo}
        if not db_url.startswith("sqlite"):
            engine_options["pool_size"] = settings.database_pool_size
            engine_options["max_overflow"] = settings.database_max_overflow

        _async_engine = create_async_engine(db_url, **engine_options)
        if db_url.startswith("sqlite"):
            event.listen(_async_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        _async_session_local = async_sessionmaker(
            _async_engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

        _initialized = True
        logger.info("Database initialized", database_url=_async_engine.url.render_as_string())


def get_async_engine() -> AsyncEngine:
    """Get the shared async SQLAlchemy engine."""
    if _async_engine is None:
        init_database()
    if _async_engine is None:
        raise RuntimeError("Database not initialized")
    return _async_engine


async def create_schema() -> None:
    """Create all tables that do not exist yet.

    Migrations are the normal path for PostgreSQL; this serves local SQLite
    databases and tests.
    """
    from ..dbmodels import Base

    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema created")


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session (async) from the shared pool.

    Commits on clean exit and rolls back on any exception.
    """
    if _async_session_local is None:
        init_database()

    if _async_session_local is None:
        raise RuntimeError("Database not initialized")

    async with _async_session_local() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

