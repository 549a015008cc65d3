"""Schema snapshots of target databases."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from dbchat_ai.core.models.base import CamelModel


class TableSchema(CamelModel):
    """Table name and its column names, as fed to prompts."""

    table_name: str
    columns: List[str] = Field(default_factory=list)


class ColumnDetail(CamelModel):
    name: str
    data_type: str
    is_nullable: bool = True
    is_primary_key: bool = False
    is_foreign_key: bool = False
    referenced_table: Optional[str] = None
    referenced_column: Optional[str] = None


class TableDetail(CamelModel):
    name: str
    table_schema: Optional[str] = None
    columns: List[ColumnDetail] = Field(default_factory=list)


class SchemaSnapshot(CamelModel):
    """Everything discovered about a database in one introspection pass.

    ``schema_raw`` holds one line per table, ``"<table> | <col> <TYPE>, ..."``.
    """

    schema_raw: List[str] = Field(default_factory=list)
    tables: List[TableSchema] = Field(default_factory=list)
    detailed: List[TableDetail] = Field(default_factory=list)


class BatchQueryItem(CamelModel):
    """Outcome of one statement of a batch."""

    query: str
    results: List[List[str]] = Field(default_factory=list)
    rows_returned: int = 0
    is_successful: bool = False
    error_message: Optional[str] = None


class BatchExecutionResult(CamelModel):
    """Outcome of a batch of statements.

    In a transactional batch the first failing statement rolls back every
    statement before it, and the statements after it are not run.
    """

    is_successful: bool = False
    queries: List[BatchQueryItem] = Field(default_factory=list)
    total_queries: int = 0
    successful_queries: int = 0
    failed_queries: int = 0
    rolled_back: bool = False
    execution_time_ms: int = 0
    error_message: Optional[str] = None
