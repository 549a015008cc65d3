"""
Database connection repository.

Data access for registered target databases.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.database_connections import DatabaseConnection
from .base import SQLModelRepository


class DatabaseConnectionRepository(SQLModelRepository[DatabaseConnection]):
    """Repository for database connection data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, DatabaseConnection)

    async def get_by_name(self, name: str, include_deleted: bool = False) -> Optional[DatabaseConnection]:
        """Get a connection by its unique name.

        Args:
            name: Connection name
            include_deleted: Also match soft-deleted connections, whose names stay taken

        Returns:
            DatabaseConnection instance or None
        """
        if include_deleted:
            stmt = select(DatabaseConnection).where(DatabaseConnection.name == name)
        else:
            stmt = self._select(DatabaseConnection.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def is_name_taken(self, name: str) -> bool:
        """Check whether any connection, deleted or not, already uses ``name``."""
        return await self.get_by_name(name, include_deleted=True) is not None

    async def list_active(self) -> List[DatabaseConnection]:
        """Get all active connections ordered by name."""
        stmt = self._select(DatabaseConnection.is_active == True).order_by(  # noqa: E712
            DatabaseConnection.name.asc()
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
