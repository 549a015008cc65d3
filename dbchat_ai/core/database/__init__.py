"""
Application store of DBChat AI.

This package holds every database entity and repository of the service,
organized by business domain.

Structure:
- entities/: SQLModel table models
- repositories/: Async data access layer over the entities
- session.py: Global engine and session factory management
- utils.py: Engine, session factory and schema creation helpers
"""

from .base import Base, utc_now
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "utc_now",
]
