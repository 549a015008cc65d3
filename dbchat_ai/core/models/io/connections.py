"""
Stored connection I/O models.

The connection string is write-only: it is accepted on create and update
but never returned.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from ..base import CamelModel
from .database import TableSchemaRead


class ConnectionRead(CamelModel):
    """Schema for reading a stored connection from API."""

    id: uuid.UUID
    name: str
    database_type: str
    description: Optional[str] = None
    is_active: bool
    environment: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    created_by: Optional[str] = None
    updated_by: Optional[str] = None


class ConnectionCreate(CamelModel):
    """Schema for registering a connection via API."""

    name: str = Field(min_length=1, max_length=100, description="Unique display name")
    database_type: str = Field(min_length=1, max_length=50, description="MSSQL, MYSQL, POSTGRESQL, ORACLE or SQLITE")
    connection_string: str = Field(min_length=1, description="SQLAlchemy URL or Key=Value; connection string")
    description: Optional[str] = Field(default=None, max_length=500)
    is_active: bool = True
    environment: Optional[str] = Field(default=None, max_length=100)
    user_id: Optional[str] = Field(default=None, description="Acting user, recorded in the audit trail")
    user_name: Optional[str] = None


class ConnectionUpdate(CamelModel):
    """Schema for updating a connection via API. Omitted fields are unchanged."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    database_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    connection_string: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, max_length=500)
    is_active: Optional[bool] = None
    environment: Optional[str] = Field(default=None, max_length=100)
    user_id: Optional[str] = None
    user_name: Optional[str] = None


class ConnectionStatusRead(CamelModel):
    id: uuid.UUID
    name: str
    database_type: str
    is_active: bool
    is_connected: bool
    checked_at: datetime


class StoredColumnRead(CamelModel):
    name: str
    data_type: str
    is_nullable: bool
    is_primary_key: bool
    is_foreign_key: bool
    referenced_table: Optional[str] = None
    referenced_column: Optional[str] = None


class StoredTableRead(CamelModel):
    name: str
    table_schema: Optional[str] = None
    columns: List[StoredColumnRead] = Field(default_factory=list)


class StoredSchemaRead(CamelModel):
    """Latest schema snapshot stored for a connection."""

    id: uuid.UUID
    database_connection_id: uuid.UUID
    schema_raw: List[str] = Field(default_factory=list)
    tables: List[TableSchemaRead] = Field(default_factory=list)
    detailed: List[StoredTableRead] = Field(default_factory=list)
    last_refreshed: datetime


class ConnectionQueryRequest(CamelModel):
    """Natural-language query against a stored connection."""

    prompt: str = Field(min_length=1)
    ai_model: str = Field(min_length=1)
    ai_service: str = Field(min_length=1)
    session_id: Optional[str] = None
    user_id: Optional[str] = None


class QueryExecutionResult(CamelModel):
    """Outcome of one run of the query workflow.

    ``results`` starts with the header row; NULL cells are rendered ``"NULL"``.
    """

    is_successful: bool
    generated_sql: str = ""
    results: List[List[Any]] = Field(default_factory=list)
    error_message: Optional[str] = None
    execution_time_ms: int = 0
    rows_returned: int = 0
    executed_at: datetime
