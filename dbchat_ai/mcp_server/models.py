"""Results of the MCP tools.

Every tool answers with one of these instead of raising, so an MCP client
always gets a document with ``isSuccessful`` and ``errorMessage``.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from dbchat_ai.core.models.base import CamelModel
from dbchat_ai.datasource.models import TableSchema


class ToolResult(CamelModel):
    is_successful: bool = False
    error_message: Optional[str] = None


class PerformanceScore(CamelModel):
    """Rough cost figures of a generated statement."""

    query_complexity: int = 0
    estimated_cost: float = 0.0
    optimization_score: float = 0.0


class QueryToolResult(ToolResult):
    """Generated SQL and its rows, header row first."""

    generated_sql: str = ""
    summary: str = ""
    results: List[List[str]] = Field(default_factory=list)
    rows_returned: int = 0
    execution_time_ms: int = 0


class AdvancedQueryResult(QueryToolResult):
    query_analysis: str = ""
    optimization_suggestions: List[str] = Field(default_factory=list)
    validation_errors: List[str] = Field(default_factory=list)
    performance_metrics: PerformanceScore = Field(default_factory=PerformanceScore)


class QueryOptimizationResult(ToolResult):
    original_query: str = ""
    optimized_query: str = ""
    performance_analysis: str = ""
    recommendations: List[str] = Field(default_factory=list)
    estimated_improvement: float = 0.0


class SchemaResult(ToolResult):
    schema_raw: List[str] = Field(default_factory=list)
    tables: List[TableSchema] = Field(default_factory=list)


class SchemaAnalysisResult(SchemaResult):
    recommendations: List[str] = Field(default_factory=list)
    performance_insights: List[str] = Field(default_factory=list)
    optimization_opportunities: List[str] = Field(default_factory=list)
    indexing_strategies: List[str] = Field(default_factory=list)


class BatchPromptItem(CamelModel):
    prompt: str
    generated_sql: str = ""
    results: List[List[str]] = Field(default_factory=list)
    rows_returned: int = 0
    is_successful: bool = False
    error_message: Optional[str] = None


class BatchQueryResult(ToolResult):
    """Outcome of a batch of questions.

    With ``rolledBack`` set, the statements reported as successful were undone
    together with the failing one.
    """

    queries: List[BatchPromptItem] = Field(default_factory=list)
    total_queries: int = 0
    successful_queries: int = 0
    failed_queries: int = 0
    rolled_back: bool = False
    execution_time_ms: int = 0


class QueryPatternAnalysisResult(ToolResult):
    patterns: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    performance_trends: List[str] = Field(default_factory=list)
    optimization_opportunities: List[str] = Field(default_factory=list)
