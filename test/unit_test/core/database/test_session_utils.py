"""Tests for engine creation, URL normalization and the session helpers."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from dbchat_ai.core.database import session as session_module
from dbchat_ai.core.database.utils import create_all, create_engine, create_sessionmaker, normalize_async_url


class TestNormalizeAsyncUrl:
    @pytest.mark.parametrize(
        "url, expected",
        [
            ("postgresql://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("postgres://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("postgresql+psycopg://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("postgresql+asyncpg://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("sqlite:///./app.db", "sqlite+aiosqlite:///./app.db"),
            ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
        ],
    )
    def test_rewrites_to_async_drivers(self, url, expected):
        assert normalize_async_url(url) == expected


class TestEngineHelpers:
    async def test_sqlite_engine_and_sessionmaker(self):
        engine = create_engine("sqlite:///:memory:")
        try:
            assert isinstance(engine, AsyncEngine)
            assert engine.url.drivername == "sqlite+aiosqlite"

            maker = create_sessionmaker(engine)
            async with maker() as session:
                assert isinstance(session, AsyncSession)
            assert maker.kw["expire_on_commit"] is False
        finally:
            await engine.dispose()

    async def test_create_all_builds_every_table(self, tmp_path):
        engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
        try:
            await create_all(engine)
            async with engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        finally:
            await engine.dispose()

        for table in ("database_connections", "query_history", "audit_logs", "user_sessions", "system_configurations"):
            assert table in tables


class TestSessionModule:
    async def test_get_session_yields_session(self):
        fake_session = MagicMock()
        maker = MagicMock()
        maker.return_value.__aenter__ = AsyncMock(return_value=fake_session)
        maker.return_value.__aexit__ = AsyncMock(return_value=False)

        with patch.object(session_module, "async_session_maker", maker):
            generator = session_module.get_session()
            assert await generator.__anext__() is fake_session
            with pytest.raises(StopAsyncIteration):
                await generator.__anext__()

    async def test_init_db_creates_sqlite_store(self):
        engine = create_engine("sqlite+aiosqlite:///:memory:")
        try:
            with (
                patch.object(session_module, "engine", engine),
                patch.object(session_module, "create_all", new_callable=AsyncMock) as mock_create_all,
            ):
                await session_module.init_db()
            mock_create_all.assert_awaited_once_with(engine)
        finally:
            await engine.dispose()

    async def test_init_db_skips_other_backends(self):
        engine = MagicMock()
        engine.url.get_backend_name.return_value = "postgresql"
        with (
            patch.object(session_module, "engine", engine),
            patch.object(session_module, "create_all", new_callable=AsyncMock) as mock_create_all,
        ):
            await session_module.init_db()
        mock_create_all.assert_not_awaited()
