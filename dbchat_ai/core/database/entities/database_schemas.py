"""
Schema catalog entity models.

These tables keep a snapshot of what was discovered the last time a
connection's schema was refreshed: one ``DatabaseSchema`` per refresh, its
tables, and each table's columns. Deleting a parent row cascades to its
children.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Index, Text
from sqlmodel import Field

from ..base import Base, utc_now


class DatabaseSchema(Base, table=True):
    """Schema snapshot of a database connection.

    Table: database_schemas
    """

    __tablename__ = "database_schemas"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    database_connection_id: uuid.UUID = Field(
        foreign_key="database_connections.id", ondelete="CASCADE", index=True
    )
    schema_raw: str = Field(sa_type=Text, description="Newline-joined one-line-per-table schema rendition")
    last_refreshed: datetime = Field(default_factory=utc_now, index=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: Optional[str] = Field(default=None, max_length=100)
    updated_by: Optional[str] = Field(default=None, max_length=100)
    is_deleted: bool = Field(default=False)

    def __repr__(self) -> str:
        return f"DatabaseSchema(id={self.id}, connection_id={self.database_connection_id})"


class DatabaseTable(Base, table=True):
    """Table discovered in a schema snapshot.

    Table: database_tables
    """

    __tablename__ = "database_tables"
    __table_args__ = (
        Index("ix_database_tables_schema_id_name", "database_schema_id", "name"),
        {"extend_existing": True},
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    database_schema_id: uuid.UUID = Field(foreign_key="database_schemas.id", ondelete="CASCADE")
    name: str = Field(max_length=100)
    table_schema: Optional[str] = Field(default=None, max_length=100, description="Owning schema, e.g. dbo or public")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: Optional[str] = Field(default=None, max_length=100)
    updated_by: Optional[str] = Field(default=None, max_length=100)
    is_deleted: bool = Field(default=False)

    def __repr__(self) -> str:
        return f"DatabaseTable(id={self.id}, name={self.name})"


class DatabaseColumn(Base, table=True):
    """Column of a discovered table.

    Table: database_columns
    """

    __tablename__ = "database_columns"
    __table_args__ = (
        Index("ix_database_columns_table_id_name", "database_table_id", "name"),
        {"extend_existing": True},
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    database_table_id: uuid.UUID = Field(foreign_key="database_tables.id", ondelete="CASCADE")
    name: str = Field(max_length=100)
    data_type: str = Field(max_length=100)
    is_nullable: bool = Field(default=True)
    is_primary_key: bool = Field(default=False)
    is_foreign_key: bool = Field(default=False)
    referenced_table: Optional[str] = Field(default=None, max_length=100)
    referenced_column: Optional[str] = Field(default=None, max_length=100)
    ordinal_position: int = Field(default=0, description="Position of the column within its table")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: Optional[str] = Field(default=None, max_length=100)
    updated_by: Optional[str] = Field(default=None, max_length=100)
    is_deleted: bool = Field(default=False)

    def __repr__(self) -> str:
        return f"DatabaseColumn(id={self.id}, name={self.name}, type={self.data_type})"
