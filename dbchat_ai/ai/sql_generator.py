"""
Natural-language to SQL generation.

``SQLQueryGenerator`` builds the task prompts, sends them through the
``EnterpriseAIClient`` and parses the JSON answers into typed results.
Enterprise query results are cached for ``AI_RESULT_CACHE_TTL_MINUTES``.
"""

from __future__ import annotations

import hashlib
from typing import List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.server.core.config import Settings, settings as app_settings

from .base import ChatMessage
from .cache import TimedCache
from .client import EnterpriseAIClient, get_ai_client
from .errors import AIResponseParseError
from .models import (
    AIQuery,
    EnterpriseAIQuery,
    QueryOptimization,
    QueryPatternAnalysis,
    QueryValidationReport,
    SchemaAnalysis,
)
from .prompts import (
    build_enterprise_query_prompt,
    build_optimization_prompt,
    build_query_pattern_prompt,
    build_schema_analysis_prompt,
    build_sql_query_prompt,
    build_validation_prompt,
)
from .query_analysis import validate_query

logger = get_logger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)


def strip_code_fences(text: str) -> str:
    """Remove the markdown code fences around a JSON answer. The JSON itself is left untouched."""
    cleaned = (text or "").replace("```json", "").replace("```", "")
    return cleaned.strip()


def extract_json_document(text: str) -> str:
    """Cut the outermost ``{...}`` block out of a model answer."""
    cleaned = strip_code_fences(text)
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end < start:
        return cleaned
    return cleaned[start : end + 1]


def parse_ai_response(raw_response: str, result_type: Type[ResultT], what: str) -> ResultT:
    """Parse a model answer into ``result_type``.

    Args:
        raw_response: Text returned by the model
        result_type: Pydantic model the JSON must validate against
        what: Name of the result used in the error message

    Returns:
        Parsed result

    Raises:
        AIResponseParseError: If the answer is not the expected JSON document
    """
    try:
        return result_type.model_validate_json(extract_json_document(raw_response))
    except ValidationError as e:
        raise AIResponseParseError(what, raw_response, str(e)) from e


class SQLQueryGenerator:
    """Generates, optimizes and reviews SQL through an AI model."""

    def __init__(self, client: EnterpriseAIClient, settings: Optional[Settings] = None) -> None:
        self._client = client
        self._settings = settings or app_settings
        ttl_seconds = self._settings.enterprise.ai_result_cache_ttl_minutes * 60
        self._result_cache: TimedCache[EnterpriseAIQuery] = TimedCache(ttl=ttl_seconds)

    @staticmethod
    def result_cache_key(prompt: str, model: str, service: str, complexity_level: str) -> str:
        raw_key = f"{prompt}_{model}_{service.lower()}_{complexity_level.lower()}"
        return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()

    async def _ask(self, messages: List[ChatMessage], model: str, service: str) -> str:
        return await self._client.chat(messages, model, service)

    async def generate_sql_query(
        self, model: str, service: str, prompt: str, schema_raw: Sequence[str], database_type: str
    ) -> AIQuery:
        """Translate a question into SQL for the given schema.

        Args:
            model: Model or deployment name
            service: AI service name
            prompt: The user's question in natural language
            schema_raw: Schema lines of the target database
            database_type: Target database type

        Returns:
            AIQuery with a summary and the SQL statement
        """
        logger.info(f"Generating SQL with {model} ({service}) for {database_type}")
        messages = [
            ChatMessage.system(build_sql_query_prompt(schema_raw, database_type)),
            ChatMessage.user(prompt),
        ]
        raw = await self._ask(messages, model, service)
        return parse_ai_response(raw, AIQuery, "AI response")

    async def chat(self, messages: Sequence[ChatMessage], model: str, service: str) -> str:
        return await self._client.chat(messages, model, service)

    async def generate_enterprise_query(
        self,
        model: str,
        service: str,
        prompt: str,
        schema_raw: Sequence[str],
        database_type: str,
        complexity_level: str = "Advanced",
        enable_caching: bool = True,
        enable_validation: bool = True,
    ) -> EnterpriseAIQuery:
        """Generate SQL together with performance and security analysis.

        Args:
            model: Model or deployment name
            service: AI service name
            prompt: The user's question in natural language
            schema_raw: Schema lines of the target database
            database_type: Target database type
            complexity_level: Expert, Advanced, Intermediate or Basic
            enable_caching: Serve and store results in the result cache
            enable_validation: Run the local validator over the generated SQL

        Returns:
            EnterpriseAIQuery; ``validation_errors`` lists local validation findings
        """
        cache_key = self.result_cache_key(prompt, model, service, complexity_level)
        if enable_caching:
            cached = await self._result_cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Enterprise query served from cache: {cache_key[:12]}")
                return cached.model_copy(deep=True)

        messages = [
            ChatMessage.system(build_enterprise_query_prompt(schema_raw, database_type, complexity_level)),
            ChatMessage.user(prompt),
        ]
        raw = await self._ask(messages, model, service)
        result = parse_ai_response(raw, EnterpriseAIQuery, "enterprise AI response")

        if enable_validation:
            validation = validate_query(result.query, database_type)
            if not validation.is_valid:
                result.validation_errors = validation.errors

        if enable_caching:
            await self._result_cache.set(cache_key, result.model_copy(deep=True))
        return result

    async def optimize_query(
        self,
        model: str,
        service: str,
        sql_query: str,
        schema_raw: Sequence[str],
        database_type: str,
        optimization_strategy: str = "Comprehensive",
    ) -> QueryOptimization:
        """Ask for an optimized rewrite of ``sql_query``."""
        prompt = build_optimization_prompt(schema_raw, database_type, sql_query, optimization_strategy)
        raw = await self._ask([ChatMessage.system(prompt)], model, service)
        return parse_ai_response(raw, QueryOptimization, "enterprise query optimization")

    async def analyze_schema(
        self,
        model: str,
        service: str,
        schema_raw: Sequence[str],
        database_type: str,
        analysis_scope: str = "Comprehensive",
    ) -> SchemaAnalysis:
        """Ask for a design review of a schema."""
        prompt = build_schema_analysis_prompt(schema_raw, database_type, analysis_scope)
        raw = await self._ask([ChatMessage.system(prompt)], model, service)
        return parse_ai_response(raw, SchemaAnalysis, "enterprise schema analysis")

    async def validate_query_with_ai(
        self, model: str, service: str, sql_query: str, schema_raw: Sequence[str], database_type: str
    ) -> QueryValidationReport:
        """Ask for a security and compliance review of ``sql_query``."""
        prompt = build_validation_prompt(schema_raw, database_type, sql_query)
        raw = await self._ask([ChatMessage.system(prompt)], model, service)
        return parse_ai_response(raw, QueryValidationReport, "enterprise query validation")

    async def analyze_query_patterns(
        self,
        model: str,
        service: str,
        historical_queries: Sequence[str],
        schema_raw: Sequence[str],
        database_type: str,
        timeframe_days: int = 30,
    ) -> QueryPatternAnalysis:
        """Ask for recurring patterns, trends and improvements across past queries."""
        prompt = build_query_pattern_prompt(schema_raw, database_type, historical_queries, timeframe_days)
        raw = await self._ask([ChatMessage.system(prompt)], model, service)
        return parse_ai_response(raw, QueryPatternAnalysis, "query pattern analysis")

    async def clear_result_cache(self) -> None:
        await self._result_cache.clear()


_sql_generator: Optional[SQLQueryGenerator] = None


def get_sql_generator() -> SQLQueryGenerator:
    """Get the process-wide SQL generator over the shared AI client."""
    global _sql_generator
    if _sql_generator is None:
        _sql_generator = SQLQueryGenerator(get_ai_client())
    return _sql_generator
