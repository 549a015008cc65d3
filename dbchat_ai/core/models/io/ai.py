"""
AI endpoint I/O models.

Contracts of ``/api/ai/*``. Every response carries an optional
``errorMessage``: these endpoints report failures in the body with status 200.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field

from dbchat_ai.ai.base import AIClientMetrics, ChatMessage
from dbchat_ai.ai.models import EnterpriseAIQuery, QueryOptimization, QueryValidationReport, SchemaAnalysis

from ..base import CamelModel


class AIModelSelection(CamelModel):
    """Which model answers, on which service."""

    ai_model: str = Field(min_length=1, description="Model or deployment name, e.g. gpt-4o")
    ai_service: str = Field(min_length=1, description="AzureOpenAI, OpenAI, Ollama, GitHubModels, AWSBedrock ...")


class TargetDatabase(CamelModel):
    """Database a request works against."""

    database_type: str = Field(min_length=1, description="MSSQL, MYSQL, POSTGRESQL, ORACLE or SQLITE")
    connection_string: str = Field(min_length=1, description="SQLAlchemy URL or Key=Value; connection string")


class AIQueryRequest(AIModelSelection, TargetDatabase):
    """Natural-language question to answer with SQL and its results."""

    prompt: str = Field(min_length=1, description="Question in natural language")


class AIQueryResponse(CamelModel):
    summary: str = ""
    query: str = ""
    results: Optional[List[Dict[str, Any]]] = None
    error_message: Optional[str] = None


class ChatRequest(AIModelSelection):
    """Free conversation with a model."""

    messages: List[ChatMessage] = Field(min_length=1, description="Conversation in order")


class ChatResponse(CamelModel):
    response: str = ""
    error_message: Optional[str] = None


class ProviderStatusRead(CamelModel):
    """Configuration status of one AI service."""

    service: str
    display_name: str
    configured: bool
    required_setting: Optional[str] = None


class AIMetricsResponse(CamelModel):
    clients: List[AIClientMetrics] = Field(default_factory=list)


class QueryValidationRequest(CamelModel):
    sql_query: str = Field(description="SQL statement to check")
    database_type: str = Field(default="", description="Target database type")


class QueryValidationResponse(CamelModel):
    """Outcome of the local heuristic checks."""

    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    complexity_score: int = 0


class EnterpriseQueryRequest(AIModelSelection, TargetDatabase):
    prompt: str = Field(min_length=1, description="Question in natural language")
    complexity_level: str = Field(default="Advanced", description="Expert, Advanced, Intermediate or Basic")
    enable_caching: bool = True
    enable_validation: bool = True


class EnterpriseQueryResponse(EnterpriseAIQuery):
    error_message: Optional[str] = None


class QueryOptimizationRequest(AIModelSelection, TargetDatabase):
    sql_query: str = Field(min_length=1, description="SQL statement to optimize")
    optimization_strategy: str = Field(default="Comprehensive", description="Performance, Memory or Comprehensive")


class QueryOptimizationResponse(QueryOptimization):
    error_message: Optional[str] = None


class SchemaAnalysisRequest(AIModelSelection, TargetDatabase):
    analysis_scope: str = Field(default="Comprehensive", description="Depth of the review")


class SchemaAnalysisResponse(SchemaAnalysis):
    error_message: Optional[str] = None


class AIValidationRequest(AIModelSelection, TargetDatabase):
    sql_query: str = Field(min_length=1, description="SQL statement to review")


class AIValidationResponse(QueryValidationReport):
    error_message: Optional[str] = None
