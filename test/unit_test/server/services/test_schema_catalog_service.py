"""Unit tests for SchemaCatalogService against a SQLite target database."""

import json
import uuid

import pytest

from dbchat_ai.core.database.entities import DatabaseConnection, DatabaseSchema
from dbchat_ai.datasource.models import ColumnDetail, SchemaSnapshot, TableDetail
from dbchat_ai.server.services.schema_catalog import SchemaCatalogService, snapshot_rows


@pytest.fixture
def catalog(repos, database_service) -> SchemaCatalogService:
    return SchemaCatalogService(repos, database_service)


@pytest.fixture
async def target_connection(repos, target_db_url) -> DatabaseConnection:
    return await repos.connections.create(
        DatabaseConnection(name="target", database_type="SQLITE", connection_string=target_db_url)
    )


def test_snapshot_rows_keeps_column_order():
    snapshot = SchemaSnapshot(
        detailed=[
            TableDetail(
                name="users",
                table_schema="main",
                columns=[
                    ColumnDetail(name="id", data_type="INTEGER", is_primary_key=True),
                    ColumnDetail(name="name", data_type="VARCHAR(50)"),
                ],
            )
        ]
    )

    [(table, columns)] = snapshot_rows(snapshot)

    assert table.name == "users"
    assert table.table_schema == "main"
    assert [(column.name, column.ordinal_position) for column in columns] == [("id", 0), ("name", 1)]
    assert columns[0].is_primary_key is True


class TestRefreshSchema:
    async def test_refresh_stores_snapshot(self, catalog, target_connection, repos):
        stored = await catalog.refresh_schema(target_connection.id, user_id="u-1")

        assert stored.database_connection_id == target_connection.id
        assert [table.table_name for table in stored.tables] == ["orders", "users"]
        assert stored.tables[1].columns == ["id", "name"]
        assert stored.schema_raw == ["orders | id INTEGER, user_id INTEGER, total REAL", "users | id INTEGER, name VARCHAR(50)"]

        orders = stored.detailed[0]
        user_id = next(column for column in orders.columns if column.name == "user_id")
        assert user_id.is_foreign_key is True
        assert user_id.referenced_table == "users"
        assert user_id.referenced_column == "id"

    async def test_refresh_is_audited(self, catalog, target_connection, repos):
        stored = await catalog.refresh_schema(target_connection.id, user_id="u-1")

        page = await repos.audit_logs.search(action="SCHEMA_REFRESHED")
        assert page.total_count == 1
        entry = page.items[0]
        assert entry.entity_id == stored.id
        assert entry.user_id == "u-1"
        assert json.loads(entry.new_values) == {"connectionId": str(target_connection.id), "tables": 2}

    async def test_refresh_replaces_previous_snapshot(self, catalog, target_connection, repos):
        first = await catalog.refresh_schema(target_connection.id)
        second = await catalog.refresh_schema(target_connection.id)

        assert first.id != second.id
        latest = await catalog.get_stored_schema(target_connection.id)
        assert latest.id == second.id
        assert await repos.schemas.get_by_id(first.id) is None
        assert await repos.schemas.count(DatabaseSchema.database_connection_id == target_connection.id) == 1

    async def test_refresh_unknown_connection(self, catalog):
        with pytest.raises(LookupError):
            await catalog.refresh_schema(uuid.uuid4())

    async def test_refresh_unreachable_database(self, catalog, repos, tmp_path):
        connection = await repos.connections.create(
            DatabaseConnection(
                name="broken",
                database_type="SQLITE",
                connection_string=f"sqlite:///{tmp_path / 'missing' / 'db.sqlite'}",
            )
        )
        with pytest.raises(Exception):
            await catalog.refresh_schema(connection.id)
        assert await repos.schemas.get_latest_for_connection(connection.id) is None


class TestGetStoredSchema:
    async def test_never_refreshed(self, catalog, target_connection):
        assert await catalog.get_stored_schema(target_connection.id) is None

    async def test_unknown_connection(self, catalog):
        with pytest.raises(LookupError):
            await catalog.get_stored_schema(uuid.uuid4())

    async def test_round_trip_of_details(self, catalog, target_connection):
        refreshed = await catalog.refresh_schema(target_connection.id)
        stored = await catalog.get_stored_schema(target_connection.id)

        assert stored == refreshed
