"""
User session repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.user_sessions import UserSession
from .base import SQLModelRepository


class UserSessionRepository(SQLModelRepository[UserSession]):
    """Repository for user session data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UserSession)

    async def get_by_session_id(self, session_id: str) -> Optional[UserSession]:
        """Get a session by its client-supplied identifier.

        Args:
            session_id: Session identifier

        Returns:
            UserSession instance or None
        """
        result = await self.session.execute(self._select(UserSession.session_id == session_id))
        return result.scalar_one_or_none()
