"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
used by the API for access to the application store.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

logger = get_logger(__name__)

engine = create_engine(settings.database.url, echo=settings.database.echo)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Initialize the application store.

    SQLite stores (the local default) are created from the ORM metadata.
    Every other backend is expected to be migrated with Alembic beforehand.
    """
    if engine.url.get_backend_name() == "sqlite":
        await create_all(engine)
        logger.info("SQLite application store created from ORM metadata")
    else:
        logger.info("Skipping create_all; run 'alembic upgrade head' to migrate the application store")
