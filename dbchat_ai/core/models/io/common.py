"""
Common I/O building blocks shared by every endpoint.
"""

from __future__ import annotations

from typing import Any, Generic, List, Type, TypeVar

from pydantic import Field

from ..base import CamelModel

T = TypeVar("T")


class ErrorResponse(CamelModel):
    """Flat error body returned by every failing endpoint."""

    error_message: str = Field(description="Human-readable description of the failure")


class PagedResult(CamelModel, Generic[T]):
    """One page of results with paging metadata."""

    data: List[T] = Field(default_factory=list)
    page: int
    page_size: int
    total_count: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Any, item_type: Type[CamelModel]) -> "PagedResult":
        """Build a result from a repository ``Page``, converting each entity to ``item_type``."""
        return cls(
            data=[item_type.model_validate(item) for item in page.items],
            page=page.page,
            page_size=page.page_size,
            total_count=page.total_count,
            total_pages=page.total_pages,
        )
