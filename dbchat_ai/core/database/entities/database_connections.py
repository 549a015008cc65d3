"""
Database connection entity models.

A database connection is a registered target database: the connection string
DBChat AI uses to discover the schema and run generated SQL, plus descriptive
metadata shown to users.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field

from ..base import Base, utc_now


class DatabaseConnectionBase(Base):
    """Base fields for database connection."""

    name: str = Field(max_length=100, unique=True, description="Unique display name of the connection")
    database_type: str = Field(max_length=50, description="MSSQL, MYSQL, POSTGRESQL, ORACLE or SQLITE")
    connection_string: str = Field(sa_type=Text, description="SQLAlchemy URL or Key=Value; connection string")
    description: Optional[str] = Field(default=None, max_length=500, description="Free-form description")
    is_active: bool = Field(default=True, index=True, description="Whether queries may run on this connection")
    environment: Optional[str] = Field(default=None, max_length=100, description="Deployment environment label")


class DatabaseConnection(DatabaseConnectionBase, table=True):
    """Registered target database.

    Table: database_connections
    """

    __tablename__ = "database_connections"
    __table_args__ = ({"extend_existing": True},)

    # Primary key
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Audit fields
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: Optional[str] = Field(default=None, max_length=100)
    updated_by: Optional[str] = Field(default=None, max_length=100)
    is_deleted: bool = Field(default=False)

    def __repr__(self) -> str:
        return f"DatabaseConnection(id={self.id}, name={self.name}, type={self.database_type})"
