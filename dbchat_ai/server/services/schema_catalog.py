"""
Schema catalog service.

Keeps a stored copy of each connection's schema so it can be browsed without
reaching the target database. A refresh replaces the previous snapshot.
"""

from __future__ import annotations

import json
import uuid
from typing import List, Optional, Tuple

from fastapi import Request

from dbchat_ai.core.database.entities import DatabaseColumn, DatabaseConnection, DatabaseSchema, DatabaseTable
from dbchat_ai.core.database.repositories import SqlRepoBundle
from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.core.models.io import StoredSchemaRead, TableSchemaRead
from dbchat_ai.core.models.io.connections import StoredColumnRead, StoredTableRead
from dbchat_ai.datasource import DatabaseService, SchemaSnapshot

from .enterprise import EnterpriseService

logger = get_logger(__name__)


def snapshot_rows(snapshot: SchemaSnapshot) -> List[Tuple[DatabaseTable, List[DatabaseColumn]]]:
    """Turn an introspection result into table and column rows."""
    rows: List[Tuple[DatabaseTable, List[DatabaseColumn]]] = []
    for table in snapshot.detailed:
        columns = [
            DatabaseColumn(
                name=column.name,
                data_type=column.data_type[:100],
                is_nullable=column.is_nullable,
                is_primary_key=column.is_primary_key,
                is_foreign_key=column.is_foreign_key,
                referenced_table=column.referenced_table,
                referenced_column=column.referenced_column,
                ordinal_position=position,
            )
            for position, column in enumerate(table.columns)
        ]
        rows.append((DatabaseTable(name=table.name, table_schema=table.table_schema), columns))
    return rows


class SchemaCatalogService:
    """Refreshes and serves stored schema snapshots."""

    def __init__(self, repos: SqlRepoBundle, database_service: DatabaseService) -> None:
        self.repos = repos
        self.database_service = database_service
        self.enterprise = EnterpriseService(repos)

    async def _get_connection(self, connection_id: uuid.UUID) -> DatabaseConnection:
        connection = await self.repos.connections.get_by_id(connection_id)
        if connection is None:
            raise LookupError(f"Database connection {connection_id} not found")
        return connection

    async def refresh_schema(
        self,
        connection_id: uuid.UUID,
        user_id: Optional[str] = None,
        user_name: Optional[str] = None,
        request: Optional[Request] = None,
    ) -> StoredSchemaRead:
        """
        Introspect a stored connection and replace its schema snapshot.

        Args:
            connection_id: DatabaseConnection ID
            user_id: Acting user, recorded in the audit trail
            user_name: Display name of the acting user
            request: Current request

        Returns:
            The new snapshot

        Raises:
            LookupError: If the connection does not exist
        """
        connection = await self._get_connection(connection_id)
        snapshot = await self.database_service.get_database_schema(
            connection.database_type, connection.connection_string
        )

        stored = await self.repos.schemas.replace_snapshot(
            connection.id, "\n".join(snapshot.schema_raw), snapshot_rows(snapshot)
        )
        logger.info(f"Refreshed schema of connection {connection.name}: {len(snapshot.tables)} tables")

        await self.enterprise.log_audit_event(
            "SCHEMA_REFRESHED",
            "DatabaseSchema",
            stored.id,
            user_id=user_id,
            user_name=user_name,
            new_values=json.dumps({"connectionId": str(connection.id), "tables": len(snapshot.tables)}),
            request=request,
        )
        return await self._to_read(stored)

    async def get_stored_schema(self, connection_id: uuid.UUID) -> Optional[StoredSchemaRead]:
        """
        Get the latest stored snapshot of a connection.

        Raises:
            LookupError: If the connection does not exist
        """
        await self._get_connection(connection_id)
        stored = await self.repos.schemas.get_latest_for_connection(connection_id)
        if stored is None:
            return None
        return await self._to_read(stored)

    async def _to_read(self, stored: DatabaseSchema) -> StoredSchemaRead:
        tables = await self.repos.schemas.get_tables(stored.id)
        columns_by_table = await self.repos.schemas.get_columns([table.id for table in tables])

        detailed = [
            StoredTableRead(
                name=table.name,
                table_schema=table.table_schema,
                columns=[StoredColumnRead.model_validate(column) for column in columns_by_table.get(table.id, [])],
            )
            for table in tables
        ]
        return StoredSchemaRead(
            id=stored.id,
            database_connection_id=stored.database_connection_id,
            schema_raw=[line for line in stored.schema_raw.splitlines() if line],
            tables=[TableSchemaRead(table_name=t.name, columns=[c.name for c in t.columns]) for t in detailed],
            detailed=detailed,
            last_refreshed=stored.last_refreshed,
        )
