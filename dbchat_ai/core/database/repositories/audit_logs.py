"""
Audit log repository.

Audit rows are searched by time window, user and action, newest first.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.audit_logs import AuditLog
from .base import Page, SQLModelRepository


class AuditLogRepository(SQLModelRepository[AuditLog]):
    """Repository for audit log data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AuditLog)

    @staticmethod
    def build_conditions(
        from_date: Optional[datetime] = None,
        to_date: Optional[datetime] = None,
        user_id: Optional[str] = None,
        action: Optional[str] = None,
    ) -> List[Any]:
        """Translate search parameters into SQL conditions."""
        conditions: List[Any] = []
        if from_date is not None:
            conditions.append(AuditLog.created_at >= from_date)
        if to_date is not None:
            conditions.append(AuditLog.created_at <= to_date)
        if user_id:
            conditions.append(AuditLog.user_id == user_id)
        if action:
            conditions.append(AuditLog.action == action)
        return conditions

    async def search(
        self,
        from_date: Optional[datetime] = None,
        to_date: Optional[datetime] = None,
        user_id: Optional[str] = None,
        action: Optional[str] = None,
        page: int = 1,
        page_size: int = 50,
    ) -> Page[AuditLog]:
        """Search the audit trail.

        Args:
            from_date: Inclusive lower bound on ``created_at``
            to_date: Inclusive upper bound on ``created_at``
            user_id: Only entries of this user
            action: Only entries with this action
            page: 1-based page number
            page_size: Entries per page

        Returns:
            Page of AuditLog entries ordered by ``created_at`` descending
        """
        conditions = self.build_conditions(from_date, to_date, user_id, action)
        return await self.get_paged(page, page_size, *conditions, order_by="created_at", ascending=False)
