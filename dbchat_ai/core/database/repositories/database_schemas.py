"""
Schema catalog repository.

Data access for stored schema snapshots. A snapshot is written as a whole:
``replace_snapshot`` soft-deletes the previous snapshot of the connection and
inserts the new schema, tables and columns in one commit.
"""

from __future__ import annotations

import uuid
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.database_schemas import DatabaseColumn, DatabaseSchema, DatabaseTable
from .base import SQLModelRepository


class DatabaseSchemaRepository(SQLModelRepository[DatabaseSchema]):
    """Repository for schema snapshots and their tables and columns."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, DatabaseSchema)

    async def get_latest_for_connection(self, connection_id: uuid.UUID) -> Optional[DatabaseSchema]:
        """Get the most recently refreshed snapshot of a connection.

        Args:
            connection_id: DatabaseConnection ID

        Returns:
            DatabaseSchema instance or None if the schema was never refreshed
        """
        stmt = (
            self._select(DatabaseSchema.database_connection_id == connection_id)
            .order_by(DatabaseSchema.last_refreshed.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_tables(self, schema_id: uuid.UUID) -> List[DatabaseTable]:
        """Get the tables of a snapshot ordered by name."""
        stmt = (
            select(DatabaseTable)
            .where(DatabaseTable.database_schema_id == schema_id)
            .where(DatabaseTable.is_deleted == False)  # noqa: E712
            .order_by(DatabaseTable.name.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_columns(self, table_ids: Sequence[uuid.UUID]) -> Dict[uuid.UUID, List[DatabaseColumn]]:
        """Get the columns of several tables, grouped by table ID.

        Args:
            table_ids: IDs of DatabaseTable rows

        Returns:
            Mapping of table ID to its columns in table order
        """
        grouped: Dict[uuid.UUID, List[DatabaseColumn]] = {table_id: [] for table_id in table_ids}
        if not table_ids:
            return grouped

        stmt = (
            select(DatabaseColumn)
            .where(DatabaseColumn.database_table_id.in_(list(table_ids)))
            .where(DatabaseColumn.is_deleted == False)  # noqa: E712
            .order_by(DatabaseColumn.ordinal_position.asc())
        )
        result = await self.session.execute(stmt)
        for column in result.scalars().all():
            grouped.setdefault(column.database_table_id, []).append(column)
        return grouped

    async def replace_snapshot(
        self,
        connection_id: uuid.UUID,
        schema_raw: str,
        tables: Sequence[Tuple[DatabaseTable, Sequence[DatabaseColumn]]],
    ) -> DatabaseSchema:
        """Store a new snapshot for a connection and retire the previous ones.

        Args:
            connection_id: DatabaseConnection ID
            schema_raw: Raw one-line-per-table schema text
            tables: Pairs of (table, columns). Foreign keys are filled in here.

        Returns:
            The persisted DatabaseSchema
        """
        now = utc_now()

        previous = await self.find(DatabaseSchema.database_connection_id == connection_id)
        for old in previous:
            old.is_deleted = True
            old.updated_at = now
            self.session.add(old)

        snapshot = DatabaseSchema(
            database_connection_id=connection_id,
            schema_raw=schema_raw,
            last_refreshed=now,
            created_at=now,
            updated_at=now,
        )
        self.session.add(snapshot)

        for table, columns in tables:
            table.database_schema_id = snapshot.id
            table.created_at = table.updated_at = now
            self.session.add(table)
            for column in columns:
                column.database_table_id = table.id
                column.created_at = column.updated_at = now
                self.session.add(column)

        await self.session.commit()
        await self.session.refresh(snapshot)
        return snapshot
