"""
Enterprise AI client façade.

``EnterpriseAIClient`` hides the differences between AI providers behind one
interface. Models are built on first use by the builder registered for their
service and kept in a flat cache keyed ``"<model>_<service>"``.

Usage:
    client = EnterpriseAIClient()
    text = await client.chat([ChatMessage.user("hello")], "gpt-4o", "OpenAI")
"""

from __future__ import annotations

import asyncio
import time
from typing import Dict, List, Optional, Sequence

from pydantic_ai.direct import model_request
from pydantic_ai.models import Model

from dbchat_ai.core import monitoring
from dbchat_ai.core.database.base import utc_now
from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.server.core.config import Settings, settings as app_settings

from .adapters import DEFAULT_MODEL_BUILDERS, ModelBuilder, response_text, to_model_messages
from .base import AIClientMetrics, ChatMessage, EnterpriseAIResponse
from .cache import TimedCache
from .errors import UnsupportedAIServiceError
from .providers import AIService, ProviderConfigValidator

logger = get_logger(__name__)


MAX_TRACKED_METRICS = 256


def estimate_tokens(content: str) -> int:
    """Rough token count of a response: four characters per token."""
    return len(content or "") // 4


class EnterpriseAIClient:
    """Multiplexes the supported AI services behind one chat interface."""

    def __init__(self, settings: Optional[Settings] = None, max_cache_size: int = 0) -> None:
        """Initialize the client.

        Args:
            settings: Application settings; the process-wide settings by default
            max_cache_size: Maximum number of cached models (0 = unlimited)
        """
        self._settings = settings or app_settings
        self._builders: Dict[AIService, ModelBuilder] = dict(DEFAULT_MODEL_BUILDERS)
        self._cache: TimedCache[Model] = TimedCache(max_size=max_cache_size)
        self._metrics: Dict[str, AIClientMetrics] = {}
        self._build_lock = asyncio.Lock()

    @staticmethod
    def cache_key(model: str, service: AIService) -> str:
        return f"{model}_{service.value}"

    def register_builder(self, service: AIService, builder: ModelBuilder) -> None:
        """Replace the model builder of a service.

        Args:
            service: AI service whose builder is replaced
            builder: Callable creating a pydantic-ai model from (model name, settings)
        """
        self._builders[AIService.parse(service)] = builder

    async def get_chat_model(self, model: str, service: str) -> Model:
        """Get the cached model for (model, service), building it on a miss.

        Args:
            model: Model or deployment name
            service: AI service name, case-insensitive

        Returns:
            pydantic-ai model ready for requests

        Raises:
            UnsupportedAIServiceError: If the service is unknown
            AIServiceConfigurationError: If the service's required setting is missing
        """
        ai_service = AIService.parse(service)
        key = self.cache_key(model, ai_service)

        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug(f"Using cached AI model: {key}")
            return cached

        async with self._build_lock:
            cached = await self._cache.get(key)
            if cached is not None:
                return cached

            ProviderConfigValidator.validate(ai_service, self._settings)
            built = self._builders[ai_service](model, self._settings)
            await self._cache.set(key, built)
        logger.info(f"Created AI model {model} for service {ai_service.value}")
        return built

    async def chat(self, messages: Sequence[ChatMessage], model: str, service: str) -> str:
        """Send a conversation and return the text of the answer.

        Args:
            messages: Conversation in order
            model: Model or deployment name
            service: AI service name

        Returns:
            Text of the model response
        """
        chat_model = await self.get_chat_model(model, service)
        response = await model_request(chat_model, to_model_messages(messages))
        return response_text(response)

    async def get_enterprise_response(
        self, messages: Sequence[ChatMessage], model: str, service: str
    ) -> EnterpriseAIResponse:
        """Send a conversation and report the outcome instead of raising.

        Args:
            messages: Conversation in order
            model: Model or deployment name
            service: AI service name

        Returns:
            EnterpriseAIResponse with content, timing and estimated tokens
        """
        started = time.perf_counter()
        try:
            content = await self.chat(messages, model, service)
        except Exception as e:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.error(f"AI request failed for {model} ({service}): {e}")
            self._record(model, service, elapsed_ms, 0, success=False)
            return EnterpriseAIResponse(is_successful=False, error_message=str(e), response_time_ms=elapsed_ms)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        token_count = estimate_tokens(content)
        self._record(model, service, elapsed_ms, token_count, success=True)
        return EnterpriseAIResponse(
            is_successful=True,
            content=content,
            response_time_ms=elapsed_ms,
            token_count=token_count,
        )

    def _record(self, model: str, service: str, elapsed_ms: int, token_count: int, success: bool) -> None:
        """Update the metrics of (model, service). Calls to unknown services are only logged."""
        try:
            ai_service = AIService.parse(service)
        except UnsupportedAIServiceError:
            monitoring.log_ai_call(model, str(service), elapsed_ms, token_count, success)
            return

        service_name = ai_service.value
        key = self.cache_key(model, ai_service)
        metrics = self._metrics.get(key)
        if metrics is None:
            if len(self._metrics) >= MAX_TRACKED_METRICS:
                stalest = min(self._metrics, key=lambda k: self._metrics[k].last_used or utc_now())
                del self._metrics[stalest]
            metrics = AIClientMetrics(model=model, service=service_name)
            self._metrics[key] = metrics

        metrics.response_time_ms = elapsed_ms
        metrics.token_count = token_count
        metrics.last_used = utc_now()
        if success:
            metrics.success_count += 1
        else:
            metrics.error_count += 1

        monitoring.log_ai_call(model, service_name, elapsed_ms, token_count, success)

    def get_client_metrics(self) -> List[AIClientMetrics]:
        """Get usage metrics of every (model, service) pair used so far."""
        return [metrics.model_copy() for metrics in self._metrics.values()]

    async def clear_cache(self) -> None:
        """Drop every cached model. Metrics are kept."""
        await self._cache.clear()
        logger.info("AI model cache cleared")


_ai_client: Optional[EnterpriseAIClient] = None


def get_ai_client() -> EnterpriseAIClient:
    """Get the process-wide AI client, creating it on first use."""
    global _ai_client
    if _ai_client is None:
        _ai_client = EnterpriseAIClient()
    return _ai_client
