"""
Work behind the DBChat MCP tools.

``MCPToolset`` is bound to one target database. It discovers the schema,
asks the SQL generator for statements and runs them through the
``DatabaseService``. The FastMCP server exposes its methods as tools, and the
``/api/mcp`` endpoints call the same methods.

Every method reports failures in its result instead of raising.
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, List, Optional, Sequence, Tuple, TypeVar

from dbchat_ai.ai import SQLQueryGenerator, calculate_complexity
from dbchat_ai.core import monitoring
from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.core.models.io.mcp import MCPConnectionStatus
from dbchat_ai.datasource import DatabaseService, SchemaSnapshot
from dbchat_ai.server.core.config import Settings, settings as app_settings

from .errors import TargetNotConfiguredError, ToolTimeoutError
from .models import (
    AdvancedQueryResult,
    BatchPromptItem,
    BatchQueryResult,
    PerformanceScore,
    QueryOptimizationResult,
    QueryPatternAnalysisResult,
    QueryToolResult,
    SchemaAnalysisResult,
    SchemaResult,
)

logger = get_logger(__name__)

MAX_SCORE = 100
NO_SQL_MESSAGE = "No SQL was generated for this prompt"
GENERATION_FAILED_MESSAGE = "Not executed: SQL generation failed for another prompt of the batch"

T = TypeVar("T")


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


async def _within(awaitable: Awaitable[T], seconds: Optional[float], what: str) -> T:
    """Await with a time limit. A limit of ``None`` or ``0`` waits forever."""
    if not seconds or seconds <= 0:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as e:
        raise ToolTimeoutError(what, seconds) from e


def score_performance(sql: str, rows_returned: int, optimizations: Sequence[str]) -> PerformanceScore:
    """Estimate complexity, cost and how much the model optimized a statement."""
    complexity = min(calculate_complexity(sql), MAX_SCORE)
    index_or_join = sum(1 for item in optimizations if "index" in item.lower() or "join" in item.lower())
    return PerformanceScore(
        query_complexity=complexity,
        estimated_cost=round(complexity * 0.1 + rows_returned * 0.01, 2),
        optimization_score=float(min(len(optimizations) * 10 + index_or_join * 5, MAX_SCORE)),
    )


class MCPToolset:
    """Schema discovery, SQL generation and execution against one target database."""

    def __init__(
        self,
        generator: SQLQueryGenerator,
        database_service: DatabaseService,
        database_type: Optional[str] = None,
        connection_string: Optional[str] = None,
    ) -> None:
        self.generator = generator
        self.database_service = database_service
        self.database_type = database_type
        self.connection_string = connection_string

    @classmethod
    def from_settings(
        cls, generator: SQLQueryGenerator, database_service: DatabaseService, config: Optional[Settings] = None
    ) -> "MCPToolset":
        """Bind a toolset to ``MCP_DATABASE_TYPE`` and ``MCP_DATABASE_CONNECTION_STRING``."""
        target = (config or app_settings).mcp
        return cls(generator, database_service, target.database_type, target.connection_string)

    def _target(self) -> Tuple[str, str]:
        if not self.connection_string:
            raise TargetNotConfiguredError("MCP_DATABASE_CONNECTION_STRING")
        if not self.database_type:
            raise TargetNotConfiguredError("MCP_DATABASE_TYPE")
        return self.database_type, self.connection_string

    async def _schema(self) -> SchemaSnapshot:
        database_type, connection_string = self._target()
        return await self.database_service.get_database_schema(database_type, connection_string)

    # Queries

    async def generate_sql(self, prompt: str, ai_model: str, ai_service: str) -> QueryToolResult:
        """Write SQL for a question without running it."""
        started = time.perf_counter()
        result = QueryToolResult()
        try:
            database_type, _ = self._target()
            snapshot = await self._schema()
            ai_query = await self.generator.generate_sql_query(
                ai_model, ai_service, prompt, snapshot.schema_raw, database_type
            )
            result.generated_sql = ai_query.query
            result.summary = ai_query.summary
            result.is_successful = True
        except Exception as e:
            logger.error(f"Failed to generate SQL for prompt '{prompt}': {e}")
            result.error_message = str(e)
        result.execution_time_ms = _elapsed_ms(started)
        return result

    async def execute_query(self, prompt: str, ai_model: str, ai_service: str) -> QueryToolResult:
        """Write SQL for a question and run it."""
        started = time.perf_counter()
        result = QueryToolResult()
        try:
            database_type, connection_string = self._target()
            snapshot = await self._schema()
            ai_query = await self.generator.generate_sql_query(
                ai_model, ai_service, prompt, snapshot.schema_raw, database_type
            )
            result.generated_sql = ai_query.query
            result.summary = ai_query.summary

            rows = await self.database_service.execute_query_rows(database_type, connection_string, ai_query.query)
            result.results = rows
            result.rows_returned = max(len(rows) - 1, 0)
            result.is_successful = True
        except Exception as e:
            logger.error(f"Failed to execute MCP query '{prompt}': {e}")
            result.error_message = str(e)

        result.execution_time_ms = _elapsed_ms(started)
        monitoring.log_query_execution(
            self.database_type or "", result.execution_time_ms, result.rows_returned, success=result.is_successful
        )
        return result

    async def execute_advanced_query(
        self,
        prompt: str,
        ai_model: str,
        ai_service: str,
        optimization_level: str = "Advanced",
        max_execution_time: float = 300,
    ) -> AdvancedQueryResult:
        """
        Write an optimized statement with analysis and run it.

        Args:
            prompt: Question in natural language
            ai_model: Model or deployment name
            ai_service: AI service name
            optimization_level: Basic, Intermediate, Advanced or Expert
            max_execution_time: Seconds the statement may run; 0 for no limit

        Returns:
            AdvancedQueryResult with rows, the model's analysis and a performance score
        """
        started = time.perf_counter()
        result = AdvancedQueryResult()
        logger.info(f"Executing advanced query with optimization level {optimization_level}")
        try:
            database_type, connection_string = self._target()
            snapshot = await self._schema()
            ai_query = await self.generator.generate_enterprise_query(
                ai_model, ai_service, prompt, snapshot.schema_raw, database_type, complexity_level=optimization_level
            )
            result.generated_sql = ai_query.query
            result.query_analysis = ai_query.analysis
            result.optimization_suggestions = ai_query.optimizations
            result.validation_errors = ai_query.validation_errors

            rows = await _within(
                self.database_service.execute_query_rows(database_type, connection_string, ai_query.query),
                max_execution_time,
                "Query execution",
            )
            result.results = rows
            result.rows_returned = max(len(rows) - 1, 0)
            result.performance_metrics = score_performance(
                ai_query.query, result.rows_returned, ai_query.optimizations
            )
            result.is_successful = True
        except Exception as e:
            logger.error(f"Failed to execute advanced query '{prompt}': {e}")
            result.error_message = str(e)

        result.execution_time_ms = _elapsed_ms(started)
        monitoring.log_query_execution(
            self.database_type or "", result.execution_time_ms, result.rows_returned, success=result.is_successful
        )
        return result

    async def execute_batch_queries(
        self,
        prompts: Sequence[str],
        ai_model: str,
        ai_service: str,
        use_transaction: bool = True,
        batch_timeout: float = 600,
    ) -> BatchQueryResult:
        """
        Answer several questions as one batch.

        SQL is generated for every prompt first. In a transactional batch
        nothing runs unless every prompt got SQL, and a failing statement
        rolls back the whole batch.
        """
        started = time.perf_counter()
        logger.info(f"Executing batch of {len(prompts)} prompts with transaction: {use_transaction}")
        try:
            result = await _within(
                self._run_batch(list(prompts), ai_model, ai_service, use_transaction), batch_timeout, "Batch"
            )
        except Exception as e:
            logger.error(f"Failed to execute batch queries: {e}")
            result = BatchQueryResult(total_queries=len(prompts), error_message=str(e))

        result.execution_time_ms = _elapsed_ms(started)
        logger.info(
            f"Batch completed. Successful: {result.successful_queries}, "
            f"Failed: {result.failed_queries}, Time: {result.execution_time_ms}ms"
        )
        return result

    async def _run_batch(
        self, prompts: List[str], ai_model: str, ai_service: str, use_transaction: bool
    ) -> BatchQueryResult:
        database_type, connection_string = self._target()
        snapshot = await self._schema()

        items = [BatchPromptItem(prompt=prompt) for prompt in prompts]
        for item in items:
            try:
                ai_query = await self.generator.generate_sql_query(
                    ai_model, ai_service, item.prompt, snapshot.schema_raw, database_type
                )
            except Exception as e:
                item.error_message = str(e)
                continue
            if ai_query.query.strip():
                item.generated_sql = ai_query.query
            else:
                item.error_message = NO_SQL_MESSAGE

        generated = [item for item in items if item.generated_sql]
        rolled_back = False
        if use_transaction and len(generated) < len(items):
            for item in generated:
                item.error_message = GENERATION_FAILED_MESSAGE
        elif generated:
            execution = await self.database_service.execute_batch_queries(
                database_type, connection_string, [item.generated_sql for item in generated], use_transaction
            )
            for item, outcome in zip(generated, execution.queries):
                item.results = outcome.results
                item.rows_returned = outcome.rows_returned
                item.is_successful = outcome.is_successful
                item.error_message = outcome.error_message
            rolled_back = execution.rolled_back

        successful = sum(1 for item in items if item.is_successful)
        return BatchQueryResult(
            is_successful=not rolled_back and successful == len(items),
            queries=items,
            total_queries=len(items),
            successful_queries=successful,
            failed_queries=len(items) - successful,
            rolled_back=rolled_back,
        )

    # Analysis

    async def optimize_query(
        self, sql_query: str, ai_model: str, ai_service: str, performance_requirement: str = "Comprehensive"
    ) -> QueryOptimizationResult:
        """Ask for a faster rewrite of a statement. Performance, Memory or Comprehensive."""
        result = QueryOptimizationResult(original_query=sql_query)
        try:
            database_type, _ = self._target()
            snapshot = await self._schema()
            optimization = await self.generator.optimize_query(
                ai_model, ai_service, sql_query, snapshot.schema_raw, database_type, performance_requirement
            )
            result.optimized_query = optimization.optimized_query
            result.performance_analysis = optimization.analysis
            result.recommendations = optimization.recommendations
            result.estimated_improvement = optimization.estimated_improvement
            result.is_successful = True
        except Exception as e:
            logger.error(f"Failed to optimize query: {e}")
            result.error_message = str(e)
        return result

    async def analyze_schema(
        self, ai_model: str, ai_service: str, analysis_depth: str = "Comprehensive"
    ) -> SchemaAnalysisResult:
        """Review the design of the target schema."""
        result = SchemaAnalysisResult()
        try:
            database_type, _ = self._target()
            snapshot = await self._schema()
            result.schema_raw = snapshot.schema_raw
            result.tables = snapshot.tables

            analysis = await self.generator.analyze_schema(
                ai_model, ai_service, snapshot.schema_raw, database_type, analysis_depth
            )
            result.recommendations = analysis.recommendations
            result.performance_insights = analysis.insights
            result.optimization_opportunities = analysis.opportunities
            result.indexing_strategies = analysis.indexing_strategies
            result.is_successful = True
        except Exception as e:
            logger.error(f"Failed to analyze schema: {e}")
            result.error_message = str(e)
        return result

    async def analyze_query_patterns(
        self, historical_queries: Sequence[str], ai_model: str, ai_service: str, timeframe_days: int = 30
    ) -> QueryPatternAnalysisResult:
        """Find recurring patterns and improvements across past queries."""
        result = QueryPatternAnalysisResult()
        logger.info(f"Analyzing {len(historical_queries)} historical queries over {timeframe_days} days")
        try:
            database_type, _ = self._target()
            snapshot = await self._schema()
            analysis = await self.generator.analyze_query_patterns(
                ai_model, ai_service, historical_queries, snapshot.schema_raw, database_type, timeframe_days
            )
            result.patterns = analysis.patterns
            result.recommendations = analysis.recommendations
            result.performance_trends = analysis.trends
            result.optimization_opportunities = analysis.opportunities
            result.is_successful = True
        except Exception as e:
            logger.error(f"Failed to analyze query patterns: {e}")
            result.error_message = str(e)
        return result

    # Target database

    async def get_schema(self) -> SchemaResult:
        result = SchemaResult()
        try:
            snapshot = await self._schema()
            result.schema_raw = snapshot.schema_raw
            result.tables = snapshot.tables
            result.is_successful = True
        except Exception as e:
            logger.error(f"Failed to load the schema of the MCP target database: {e}")
            result.error_message = str(e)
        return result

    async def get_status(self) -> MCPConnectionStatus:
        """Check that the target database is configured and answers."""
        status = MCPConnectionStatus(database_type=self.database_type or "")
        try:
            database_type, connection_string = self._target()
        except TargetNotConfiguredError as e:
            status.error_message = str(e)
            return status

        status.is_connected = await self.database_service.test_connection(database_type, connection_string)
        if not status.is_connected:
            status.error_message = f"Cannot connect to the {database_type} database"
        return status
