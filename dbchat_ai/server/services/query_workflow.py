"""
Query workflow service.

Runs a natural-language question against a stored connection: load the
connection, discover its schema, let the model write SQL, execute it, and
leave a query history row and an audit entry behind whatever the outcome.
Also reports usage metrics over the recorded history.
"""

from __future__ import annotations

import json
import time
import uuid
from collections import Counter
from datetime import date, timedelta
from typing import Dict, List, Optional

from fastapi import Request

from dbchat_ai.ai import SQLQueryGenerator
from dbchat_ai.core import monitoring
from dbchat_ai.core.database.base import utc_now
from dbchat_ai.core.database.entities import QueryHistory
from dbchat_ai.core.database.repositories import SqlRepoBundle
from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.core.models.io import DailyQueryStats, QueryExecutionResult, QueryMetrics
from dbchat_ai.datasource import DatabaseService
from dbchat_ai.server.core.config import settings

from .enterprise import EnterpriseService

logger = get_logger(__name__)

ERROR_MESSAGE_LIMIT = 1000


class QueryWorkflowService:
    """Natural-language queries against stored connections, with history."""

    def __init__(
        self,
        repos: SqlRepoBundle,
        generator: SQLQueryGenerator,
        database_service: DatabaseService,
    ) -> None:
        self.repos = repos
        self.generator = generator
        self.database_service = database_service
        self.enterprise = EnterpriseService(repos)

    async def execute_query(
        self,
        connection_id: uuid.UUID,
        prompt: str,
        model: str,
        service: str,
        session_id: Optional[str] = None,
        user_id: Optional[str] = None,
        request: Optional[Request] = None,
        audit_action_prefix: str = "QUERY",
    ) -> QueryExecutionResult:
        """
        Answer a question against a stored connection.

        Args:
            connection_id: DatabaseConnection ID
            prompt: Question in natural language
            model: Model or deployment name
            service: AI service name
            session_id: Client session the query belongs to
            user_id: Acting user
            request: Current request
            audit_action_prefix: Audit actions are recorded as ``<prefix>_EXECUTED`` or ``<prefix>_FAILED``

        Returns:
            QueryExecutionResult; failures are reported in it, never raised
        """
        started = time.perf_counter()
        executed_at = utc_now()

        connection = await self.repos.connections.get_by_id(connection_id)
        if connection is None or not connection.is_active:
            message = f"No active database connection found with id {connection_id}"
            logger.warning(message)
            return QueryExecutionResult(is_successful=False, error_message=message, executed_at=executed_at)

        generated_sql = ""
        try:
            snapshot = await self.database_service.get_database_schema(
                connection.database_type, connection.connection_string
            )
            ai_query = await self.generator.generate_sql_query(
                model, service, prompt, snapshot.schema_raw, connection.database_type
            )
            generated_sql = ai_query.query

            rows = await self.database_service.execute_query_rows(
                connection.database_type, connection.connection_string, generated_sql
            )
        except Exception as e:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.error(f"Query workflow failed on {connection.name}: {e}")
            monitoring.log_query_execution(connection.database_type, elapsed_ms, 0, success=False)
            await self._record(
                connection.id, prompt, generated_sql, model, service, elapsed_ms, False, str(e), 0, session_id, user_id
            )
            await self.enterprise.log_audit_event(
                f"{audit_action_prefix}_FAILED",
                "QueryHistory",
                None,
                user_id=user_id,
                new_values=json.dumps({"prompt": prompt, "aiModel": model, "aiService": service, "error": str(e)}),
                request=request,
            )
            return QueryExecutionResult(
                is_successful=False,
                generated_sql=generated_sql,
                error_message=str(e),
                execution_time_ms=elapsed_ms,
                executed_at=executed_at,
            )

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        rows_returned = max(len(rows) - 1, 0)
        monitoring.log_query_execution(connection.database_type, elapsed_ms, rows_returned, success=True)

        history = await self._record(
            connection.id, prompt, generated_sql, model, service, elapsed_ms, True, None, rows_returned, session_id, user_id
        )
        await self.enterprise.log_audit_event(
            f"{audit_action_prefix}_EXECUTED",
            "QueryHistory",
            history.id,
            user_id=user_id,
            new_values=json.dumps(
                {"prompt": prompt, "aiModel": model, "aiService": service, "rowsReturned": rows_returned}
            ),
            request=request,
        )
        logger.info(f"Query on {connection.name} returned {rows_returned} rows in {elapsed_ms}ms")

        return QueryExecutionResult(
            is_successful=True,
            generated_sql=generated_sql,
            results=rows,
            execution_time_ms=elapsed_ms,
            rows_returned=rows_returned,
            executed_at=executed_at,
        )

    async def _record(
        self,
        connection_id: uuid.UUID,
        prompt: str,
        generated_sql: str,
        model: str,
        service: str,
        elapsed_ms: int,
        is_successful: bool,
        error_message: Optional[str],
        rows_returned: int,
        session_id: Optional[str],
        user_id: Optional[str],
    ) -> QueryHistory:
        history = QueryHistory(
            user_prompt=prompt,
            generated_sql=generated_sql,
            ai_model=model,
            ai_service=service,
            execution_time_ms=elapsed_ms,
            is_successful=is_successful,
            error_message=error_message[:ERROR_MESSAGE_LIMIT] if error_message else None,
            rows_returned=rows_returned,
            database_connection_id=connection_id,
            user_id=user_id,
            session_id=session_id,
        )
        return await self.repos.query_history.create(history)

    async def get_metrics(self, days: Optional[int] = None) -> QueryMetrics:
        """
        Summarize the query history of the last ``days`` days.

        Args:
            days: Look-back window; ``QUERY_METRICS_WINDOW_DAYS`` by default

        Returns:
            QueryMetrics with counts, average duration and per-model/per-service totals
        """
        window = days if days is not None else settings.enterprise.query_metrics_window_days
        entries = await self.repos.query_history.list_since(utc_now() - timedelta(days=window))
        if not entries:
            return QueryMetrics()

        successful = sum(1 for entry in entries if entry.is_successful)
        return QueryMetrics(
            total_queries=len(entries),
            successful_queries=successful,
            failed_queries=len(entries) - successful,
            average_execution_time_ms=sum(entry.execution_time_ms for entry in entries) / len(entries),
            last_query_time=max(entry.created_at for entry in entries),
            queries_by_model=dict(Counter(entry.ai_model for entry in entries)),
            queries_by_service=dict(Counter(entry.ai_service for entry in entries)),
        )

    async def get_weekly_stats(self) -> List[DailyQueryStats]:
        """Count queries per day over the last 7 days, in date order."""
        entries = await self.repos.query_history.list_since(utc_now() - timedelta(days=7))

        per_day: Dict[date, List[QueryHistory]] = {}
        for entry in entries:
            per_day.setdefault(entry.created_at.date(), []).append(entry)

        return [
            DailyQueryStats(
                date=day,
                count=len(day_entries),
                successful=sum(1 for entry in day_entries if entry.is_successful),
            )
            for day, day_entries in sorted(per_day.items())
        ]
