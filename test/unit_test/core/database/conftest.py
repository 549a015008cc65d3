"""Test configuration for database unit tests.

This module provides common fixtures for testing the application store with
in-memory SQLite and mocked sessions.
"""

from __future__ import annotations

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import dbchat_ai.core.database.entities  # noqa: F401
from dbchat_ai.core.database.base import Base
from dbchat_ai.core.database.entities import DatabaseConnection
from dbchat_ai.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session


@pytest.fixture
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine with every table."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    session_factory = async_sessionmaker(in_memory_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def repos(in_memory_session) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=in_memory_session)


@pytest.fixture
def mock_session():
    """Mock async database session."""
    session = AsyncMock()
    session.add = MagicMock()
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    mock_result = MagicMock()
    mock_result.scalar_one_or_none = MagicMock()
    mock_result.scalar_one = MagicMock()
    mock_result.scalars = MagicMock()
    session.execute = AsyncMock(return_value=mock_result)
    return session


@pytest.fixture
def sample_connection_data() -> dict:
    return {
        "name": "sales",
        "database_type": "SQLITE",
        "connection_string": "sqlite:///./sales.db",
        "description": "Sales reporting database",
        "is_active": True,
        "environment": "development",
    }


@pytest.fixture
async def stored_connection(repos, sample_connection_data) -> DatabaseConnection:
    return await repos.connections.create(DatabaseConnection(**sample_connection_data))
