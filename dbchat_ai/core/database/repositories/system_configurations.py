"""
System configuration repository.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.system_configurations import SystemConfiguration
from .base import SQLModelRepository


class SystemConfigurationRepository(SQLModelRepository[SystemConfiguration]):
    """Repository for system configuration data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SystemConfiguration)

    async def get_by_key(self, key: str) -> Optional[SystemConfiguration]:
        """Get a configuration entry by key."""
        result = await self.session.execute(self._select(SystemConfiguration.key == key))
        return result.scalar_one_or_none()

    async def list_by_category(self, category: Optional[str] = None) -> List[SystemConfiguration]:
        """Get configuration entries ordered by key.

        Args:
            category: Only return entries of this category; None returns all

        Returns:
            List of SystemConfiguration instances
        """
        stmt = self._select()
        if category:
            stmt = stmt.where(SystemConfiguration.category == category)
        result = await self.session.execute(stmt.order_by(SystemConfiguration.key.asc()))
        return list(result.scalars().all())
