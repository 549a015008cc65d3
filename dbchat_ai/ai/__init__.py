"""
AI layer of DBChat AI.

- ``providers``: supported services and their configuration checks
- ``adapters``: pydantic-ai model builders per service
- ``client``: the ``EnterpriseAIClient`` façade with its model cache and metrics
- ``sql_generator``: prompts in, typed SQL results out
- ``query_analysis``: local validation and complexity scoring of SQL
"""

from .base import AIClientMetrics, ChatMessage, ChatRole, EnterpriseAIResponse
from .client import EnterpriseAIClient, get_ai_client
from .errors import AIResponseParseError, AIServiceConfigurationError, UnsupportedAIServiceError
from .providers import AVAILABLE_MODELS, AIService, ProviderConfigValidator
from .query_analysis import QueryValidationResult, calculate_complexity, validate_query
from .sql_generator import SQLQueryGenerator, get_sql_generator

__all__ = [
    "AIClientMetrics",
    "AIResponseParseError",
    "AIService",
    "AIServiceConfigurationError",
    "AVAILABLE_MODELS",
    "ChatMessage",
    "ChatRole",
    "EnterpriseAIClient",
    "EnterpriseAIResponse",
    "ProviderConfigValidator",
    "QueryValidationResult",
    "SQLQueryGenerator",
    "UnsupportedAIServiceError",
    "calculate_complexity",
    "get_ai_client",
    "get_sql_generator",
    "validate_query",
]
