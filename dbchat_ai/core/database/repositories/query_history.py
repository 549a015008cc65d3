"""
Query history repository.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.query_history import QueryHistory
from .base import Page, SQLModelRepository


class QueryHistoryRepository(SQLModelRepository[QueryHistory]):
    """Repository for query history data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, QueryHistory)

    async def list_since(self, since: datetime) -> List[QueryHistory]:
        """Get all queries created at or after ``since``, oldest first.

        Args:
            since: Naive UTC lower bound

        Returns:
            List of QueryHistory instances
        """
        stmt = self._select(QueryHistory.created_at >= since).order_by(QueryHistory.created_at.asc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_connection(self, connection_id: uuid.UUID, limit: int = 50) -> List[QueryHistory]:
        """Get the latest queries of one connection, newest first."""
        stmt = (
            self._select(QueryHistory.database_connection_id == connection_id)
            .order_by(QueryHistory.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(
        self,
        connection_id: Optional[uuid.UUID] = None,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
        is_successful: Optional[bool] = None,
        page: int = 1,
        page_size: int = 50,
    ) -> Page[QueryHistory]:
        """Page through the history, newest first, keeping only matching entries."""
        conditions: List[Any] = []
        if connection_id is not None:
            conditions.append(QueryHistory.database_connection_id == connection_id)
        if user_id:
            conditions.append(QueryHistory.user_id == user_id)
        if session_id:
            conditions.append(QueryHistory.session_id == session_id)
        if is_successful is not None:
            conditions.append(QueryHistory.is_successful == is_successful)
        return await self.get_paged(page, page_size, *conditions, order_by="created_at", ascending=False)
