"""
Database connect I/O models.

Contract of ``/api/database/connect``: the client sends a name, a database
type and a connection string and gets back the discovered schema or an
``errorMessage``.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from ..base import CamelModel


class DatabaseConnectRequest(CamelModel):
    """Schema for testing a connection and discovering its schema."""

    name: str = Field(min_length=1, description="Display name of the connection")
    database_type: str = Field(min_length=1, description="MSSQL, MYSQL, POSTGRESQL, ORACLE or SQLITE")
    connection_string: str = Field(min_length=1, description="SQLAlchemy URL or Key=Value; connection string")


class TableSchemaRead(CamelModel):
    """Table name and its column names."""

    table_name: str
    columns: List[str] = Field(default_factory=list)


class DatabaseSchemaRead(CamelModel):
    """Discovered schema as shown to clients and fed to prompts."""

    schema_raw: List[str] = Field(default_factory=list, description="One line per table")
    tables: List[TableSchemaRead] = Field(default_factory=list)


class DatabaseConnectResponse(CamelModel):
    """Result of a connect attempt."""

    name: str
    database_type: str
    is_connected: bool
    error_message: Optional[str] = None
    db_schema: Optional[DatabaseSchemaRead] = Field(default=None, alias="schema")
