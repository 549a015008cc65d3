"""
Target database service.

``DatabaseService`` introspects and queries the databases users connect to.
These are reached through synchronous SQLAlchemy engines whose drivers have
no asyncio flavour, so every call runs in a worker thread and the engine is
disposed when the call ends.
"""

from __future__ import annotations

import asyncio
import time
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterator, List

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from dbchat_ai.core.logging_config import get_logger

from .connection import DatabaseType, build_connection_url
from .models import BatchExecutionResult, BatchQueryItem, ColumnDetail, SchemaSnapshot, TableDetail, TableSchema

logger = get_logger(__name__)

NULL_TEXT = "NULL"
ROLLED_BACK_MESSAGE = "Not executed: an earlier statement failed and the batch was rolled back"


def render_value(value: Any) -> str:
    """Render a result cell as text. ``None`` becomes ``"NULL"``."""
    if value is None:
        return NULL_TEXT
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.hex()
    return str(value)


def _json_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.hex()
    return value


def format_schema_line(table: TableDetail) -> str:
    columns = ", ".join(f"{column.name} {column.data_type}" for column in table.columns)
    return f"{table.name} | {columns}"


@contextmanager
def _engine_for(database_type: str, connection_string: str) -> Iterator[Engine]:
    engine = create_engine(build_connection_url(database_type, connection_string))
    try:
        yield engine
    finally:
        engine.dispose()


def _run_batch_item(connection: Connection, sql: str) -> BatchQueryItem:
    try:
        result = connection.execute(text(sql))
        if not result.returns_rows:
            return BatchQueryItem(query=sql, rows_returned=max(result.rowcount, 0), is_successful=True)
        rows: List[List[str]] = [list(result.keys())]
        rows.extend([render_value(value) for value in row] for row in result)
        return BatchQueryItem(query=sql, results=rows, rows_returned=len(rows) - 1, is_successful=True)
    except SQLAlchemyError as e:
        logger.error(f"Failed to execute query in batch: {sql}: {e}")
        return BatchQueryItem(query=sql, error_message=str(e))


class DatabaseService:
    """Schema discovery and statement execution against target databases."""

    # Blocking implementations, run through asyncio.to_thread

    def _introspect(self, database_type: str, connection_string: str) -> SchemaSnapshot:
        with _engine_for(database_type, connection_string) as engine:
            inspector = inspect(engine)
            detailed: List[TableDetail] = []
            for table_name in sorted(inspector.get_table_names()):
                primary_keys = set(inspector.get_pk_constraint(table_name).get("constrained_columns") or [])
                references: Dict[str, tuple] = {}
                for foreign_key in inspector.get_foreign_keys(table_name):
                    for local, remote in zip(foreign_key["constrained_columns"], foreign_key["referred_columns"]):
                        references[local] = (foreign_key["referred_table"], remote)

                columns = []
                for column in inspector.get_columns(table_name):
                    referenced_table, referenced_column = references.get(column["name"], (None, None))
                    columns.append(
                        ColumnDetail(
                            name=column["name"],
                            data_type=str(column["type"]),
                            is_nullable=bool(column.get("nullable", True)),
                            is_primary_key=column["name"] in primary_keys,
                            is_foreign_key=column["name"] in references,
                            referenced_table=referenced_table,
                            referenced_column=referenced_column,
                        )
                    )
                detailed.append(TableDetail(name=table_name, table_schema=inspector.default_schema_name, columns=columns))

        return SchemaSnapshot(
            schema_raw=[format_schema_line(table) for table in detailed],
            tables=[TableSchema(table_name=table.name, columns=[c.name for c in table.columns]) for table in detailed],
            detailed=detailed,
        )

    def _execute(self, database_type: str, connection_string: str, sql: str) -> List[Dict[str, Any]]:
        with _engine_for(database_type, connection_string) as engine:
            with engine.connect() as connection:
                result = connection.execute(text(sql))
                if not result.returns_rows:
                    connection.commit()
                    return []
                return [{key: _json_value(value) for key, value in row.items()} for row in result.mappings()]

    def _execute_rows(self, database_type: str, connection_string: str, sql: str) -> List[List[str]]:
        with _engine_for(database_type, connection_string) as engine:
            with engine.connect() as connection:
                result = connection.execute(text(sql))
                if not result.returns_rows:
                    connection.commit()
                    return []
                rows: List[List[str]] = [list(result.keys())]
                rows.extend([render_value(value) for value in row] for row in result)
                return rows

    def _execute_batch(
        self, database_type: str, connection_string: str, queries: List[str], use_transaction: bool
    ) -> BatchExecutionResult:
        started = time.perf_counter()
        items: List[BatchQueryItem] = []
        rolled_back = False
        with _engine_for(database_type, connection_string) as engine:
            if use_transaction:
                with engine.connect() as connection:
                    transaction = connection.begin()
                    for index, sql in enumerate(queries):
                        item = _run_batch_item(connection, sql)
                        items.append(item)
                        if not item.is_successful:
                            transaction.rollback()
                            rolled_back = True
                            items.extend(
                                BatchQueryItem(query=rest, error_message=ROLLED_BACK_MESSAGE)
                                for rest in queries[index + 1 :]
                            )
                            break
                    else:
                        transaction.commit()
            else:
                for sql in queries:
                    with engine.connect() as connection:
                        item = _run_batch_item(connection, sql)
                        if item.is_successful:
                            connection.commit()
                        else:
                            connection.rollback()
                        items.append(item)

        successful = sum(1 for item in items if item.is_successful)
        return BatchExecutionResult(
            is_successful=not rolled_back and successful == len(items),
            queries=items,
            total_queries=len(items),
            successful_queries=successful,
            failed_queries=len(items) - successful,
            rolled_back=rolled_back,
            execution_time_ms=int((time.perf_counter() - started) * 1000),
        )

    def _ping(self, database_type: str, connection_string: str) -> None:
        statement = "SELECT 1 FROM DUAL" if DatabaseType.parse(database_type) is DatabaseType.ORACLE else "SELECT 1"
        with _engine_for(database_type, connection_string) as engine:
            with engine.connect() as connection:
                connection.execute(text(statement))

    # Async API

    async def get_database_schema(self, database_type: str, connection_string: str) -> SchemaSnapshot:
        """Discover the tables and columns of a database.

        Args:
            database_type: Target database type
            connection_string: SQLAlchemy URL or ``Key=Value;`` string

        Returns:
            SchemaSnapshot with prompt lines, table summaries and column details
        """
        logger.info(f"Loading schema of {database_type} database")
        snapshot = await asyncio.to_thread(self._introspect, database_type, connection_string)
        logger.debug(f"Discovered {len(snapshot.tables)} tables")
        return snapshot

    async def execute_query(self, database_type: str, connection_string: str, sql: str) -> List[Dict[str, Any]]:
        """Run a statement and return its rows as dictionaries keyed by column name."""
        logger.info(f"Executing query against {database_type} database")
        return await asyncio.to_thread(self._execute, database_type, connection_string, sql)

    async def execute_query_rows(self, database_type: str, connection_string: str, sql: str) -> List[List[str]]:
        """Run a statement and return a header row followed by rows rendered as text."""
        logger.info(f"Executing query against {database_type} database")
        return await asyncio.to_thread(self._execute_rows, database_type, connection_string, sql)

    async def execute_batch_queries(
        self, database_type: str, connection_string: str, queries: List[str], use_transaction: bool = True
    ) -> BatchExecutionResult:
        """
        Run several statements in order.

        Args:
            database_type: Target database type
            connection_string: SQLAlchemy URL or ``Key=Value;`` string
            queries: Statements to run
            use_transaction: Run every statement in one transaction. The first
                failure rolls the whole batch back and skips the rest. Without
                a transaction each statement commits on its own and a failure
                does not stop the batch.

        Returns:
            BatchExecutionResult with one item per statement
        """
        logger.info(f"Executing batch of {len(queries)} queries with transaction: {use_transaction}")
        result = await asyncio.to_thread(
            self._execute_batch, database_type, connection_string, list(queries), use_transaction
        )
        logger.info(
            f"Batch execution completed. Successful: {result.successful_queries}, "
            f"Failed: {result.failed_queries}, Time: {result.execution_time_ms}ms"
        )
        return result

    async def test_connection(self, database_type: str, connection_string: str) -> bool:
        """Check that the database answers a trivial statement. Never raises."""
        try:
            await asyncio.to_thread(self._ping, database_type, connection_string)
            return True
        except Exception as e:
            logger.warning(f"Connection test against {database_type} database failed: {e}")
            return False


_database_service = DatabaseService()


def get_database_service() -> DatabaseService:
    """FastAPI dependency returning the shared database service."""
    return _database_service
