"""
Base repository interfaces and utilities.

This module provides the repository contract shared by every entity of the
application store, a generic SQLModel implementation of it, and the query
helpers used to build filtered and paginated statements.

All entities carry an ``is_deleted`` flag. Repositories never return rows
with the flag set and ``delete`` only sets it.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from ..base import utc_now

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


@dataclass(frozen=True)
class Page(Generic[EntityType]):
    """One page of a paginated query."""

    items: List[EntityType]
    page: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """Base async repository interface with common CRUD operations using SQLModel."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with async database session and SQLModel entity class.

        Args:
            session: Async SQLAlchemy session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType:
        """Create a new entity record.

        Args:
            entity: SQLModel instance to persist

        Returns:
            Persisted entity with generated fields populated
        """

    @abstractmethod
    async def get_by_id(self, entity_id: Any) -> Optional[EntityType]:
        """Get entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            Entity instance or None if not found
        """

    @abstractmethod
    async def update(self, entity: EntityType) -> EntityType:
        """Update an existing entity record.

        Args:
            entity: SQLModel instance with updated fields

        Returns:
            Updated entity instance
        """

    @abstractmethod
    async def delete(self, entity_id: Any) -> bool:
        """Delete entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            True if deleted, False if not found
        """

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List entities with optional pagination and filtering.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip
            filters: Dictionary of field filters

        Returns:
            List of entity instances
        """

    @abstractmethod
    async def find(self, *conditions: Any) -> List[EntityType]:
        """Get every entity matching all given SQL expressions."""

    @abstractmethod
    async def exists(self, *conditions: Any) -> bool:
        """Check whether at least one entity matches all given SQL expressions."""

    @abstractmethod
    async def count(self, *conditions: Any) -> int:
        """Count the entities matching all given SQL expressions."""

    @abstractmethod
    async def get_paged(
        self,
        page: int,
        page_size: int,
        *conditions: Any,
        order_by: Optional[str] = None,
        ascending: bool = True,
    ) -> Page[EntityType]:
        """Get one page of entities matching all given SQL expressions."""


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply equality filters to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            model: SQLModel entity class
            filters: Dictionary of field filters; None values are ignored

        Returns:
            Modified select statement with filters applied
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply pagination to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt

    @staticmethod
    def apply_ordering(stmt, model: Type[EntityType], order_by: Optional[str], ascending: bool = True):
        """Order a statement by the named column, defaulting to ``created_at``.

        Args:
            stmt: SQLModel select statement
            model: SQLModel entity class
            order_by: Column name; unknown names fall back to ``created_at``
            ascending: Sort direction

        Returns:
            Ordered select statement
        """
        column_name = order_by if order_by and hasattr(model, order_by) else "created_at"
        column = getattr(model, column_name)
        return stmt.order_by(column.asc() if ascending else column.desc())


class SQLModelRepository(AsyncBaseRepository[EntityType]):
    """Generic async repository over one SQLModel table with soft deletion."""

    def _not_deleted(self):
        return self.model.is_deleted == False  # noqa: E712

    def _select(self, *conditions: Any):
        stmt = select(self.model).where(self._not_deleted())
        for condition in conditions:
            stmt = stmt.where(condition)
        return stmt

    async def create(self, entity: EntityType) -> EntityType:
        now = utc_now()
        entity.created_at = now
        entity.updated_at = now
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: Any) -> Optional[EntityType]:
        stmt = self._select(self.model.id == entity_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, entity: EntityType) -> EntityType:
        entity.updated_at = utc_now()
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity_id: Any) -> bool:
        """Soft delete: flag the row so no repository read returns it again."""
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        entity.is_deleted = True
        entity.updated_at = utc_now()
        self.session.add(entity)
        await self.session.commit()
        return True

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        stmt = self._select().order_by(self.model.created_at.desc())
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_all(self) -> List[EntityType]:
        """Get every non-deleted entity, oldest first."""
        result = await self.session.execute(self._select().order_by(self.model.created_at.asc()))
        return list(result.scalars().all())

    async def find(self, *conditions: Any) -> List[EntityType]:
        result = await self.session.execute(self._select(*conditions))
        return list(result.scalars().all())

    async def exists(self, *conditions: Any) -> bool:
        return await self.count(*conditions) > 0

    async def count(self, *conditions: Any) -> int:
        stmt = select(func.count()).select_from(self.model).where(self._not_deleted())
        for condition in conditions:
            stmt = stmt.where(condition)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def get_paged(
        self,
        page: int,
        page_size: int,
        *conditions: Any,
        order_by: Optional[str] = None,
        ascending: bool = True,
    ) -> Page[EntityType]:
        page = max(page, 1)
        page_size = max(page_size, 1)

        total_count = await self.count(*conditions)

        stmt = QueryBuilder.apply_ordering(self._select(*conditions), self.model, order_by, ascending)
        stmt = QueryBuilder.apply_pagination(stmt, page_size, (page - 1) * page_size)
        result = await self.session.execute(stmt)

        return Page(
            items=list(result.scalars().all()),
            page=page,
            page_size=page_size,
            total_count=total_count,
        )
