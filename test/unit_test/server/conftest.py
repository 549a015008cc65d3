"""
Fixtures of the server tests.

The application store is an in-memory SQLite database shared through a
StaticPool. The AI client, SQL generator and target database fixtures come
from the shared unit test conftest.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

import dbchat_ai.core.database.entities  # noqa: F401
from dbchat_ai.core.database.base import Base
from dbchat_ai.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory application store with every table."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async_session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session_maker() as session:
        yield session


@pytest.fixture
def repos(session: AsyncSession) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session)


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession, ai_client, sql_generator, database_service
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from dbchat_ai.ai import get_ai_client, get_sql_generator
    from dbchat_ai.core.database.session import get_session
    from dbchat_ai.datasource import get_database_service
    from dbchat_ai.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_ai_client] = lambda: ai_client
    app.dependency_overrides[get_sql_generator] = lambda: sql_generator
    app.dependency_overrides[get_database_service] = lambda: database_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
