"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport

from quill.client import GraphQLClient, get_client
from quill.database.seed_data import SeedData


@pytest.fixture(scope="function")
def test_database_url(tmp_path: Path) -> str:
    """Return the URL of a throwaway SQLite database file for this test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'quill-test.db'}"


@pytest_asyncio.fixture(scope="function")
async def database(test_database_url: str) -> AsyncGenerator[str, None]:
    """Point the shared engine at a fresh database with all tables created."""
    from quill.database.connection import (
        create_schema,
        dispose_database,
        init_database,
        reset_database,
    )

    os.environ["QUILL_DATABASE_URL"] = test_database_url

    reset_database()
    init_database(test_database_url, force_reinit=True)
    await create_schema()

    yield test_database_url

    await dispose_database()


@pytest_asyncio.fixture(scope="function")
async def seed(database: str) -> SeedData:
    """Seed the fixture user and posts before the test runs."""
    from quill.database.connection import get_async_session
    from quill.database.seed_data import seed_database

    async with get_async_session() as db:
        return await seed_database(db)


@pytest.fixture(scope="function")
def app(database: str) -> Any:
    from quill.api.app import create_app

    return create_app()


@pytest_asyncio.fixture(scope="function")
async def get_test_client(
    app: Any,
) -> AsyncGenerator[Callable[..., GraphQLClient], None]:
    """
    Factory for GraphQL clients talking to the in-process app.

    Call with a token to get an authenticated client.
    """
    transport = ASGITransport(app=app)
    clients: list[GraphQLClient] = []

    def factory(token: str | None = None) -> GraphQLClient:
        client = get_client(token, endpoint="http://test/graphql", transport=transport)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_auth_adapter_cache() -> Generator[None, None, None]:
    """Build the auth adapter from each test's settings."""
    from quill.auth.factory import reset_auth_adapter

    reset_auth_adapter()
    yield
    reset_auth_adapter()


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(  # type: ignore[reportUnknownMemberType]
        "markers", "requires_db: mark test as requiring database connection"
    )
    config.addinivalue_line("markers", "integration: mark test as integration test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "unit: mark test as unit test")  # type: ignore[reportUnknownMemberType]
