"""
Base database models and utilities.

This module provides the foundational database components used across
all entities of the application store using SQLModel.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import ConfigDict
from sqlmodel import SQLModel


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def utc_now() -> datetime:
    """Current UTC time as a naive datetime.

    Timestamps are stored without tzinfo so SQLite and PostgreSQL round-trip
    the same values.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
