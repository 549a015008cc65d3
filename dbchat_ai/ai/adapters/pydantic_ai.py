"""Pydantic AI adapter for the AI client façade.

This module turns an (AI service, model name) pair into a ready pydantic-ai
``Model`` and converts conversations between the façade's ``ChatMessage``
list and pydantic-ai's message objects.

Every builder receives the model name exactly as the client sent it and the
application ``Settings``. Builders never perform network I/O; the first
request does.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence

from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models import Model
from pydantic_ai.models.anthropic import AnthropicModel
from pydantic_ai.models.bedrock import BedrockConverseModel
from pydantic_ai.models.cohere import CohereModel
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.anthropic import AnthropicProvider
from pydantic_ai.providers.azure import AzureProvider
from pydantic_ai.providers.bedrock import BedrockProvider
from pydantic_ai.providers.cohere import CohereProvider
from pydantic_ai.providers.github import GitHubProvider
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.ollama import OllamaProvider
from pydantic_ai.providers.openai import OpenAIProvider

from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.server.core.config import Settings

from ..base import ChatMessage, ChatRole
from ..providers import AIService

logger = get_logger(__name__)

ModelBuilder = Callable[[str, Settings], Model]

GITHUB_MODELS_ENDPOINT = "https://models.github.ai/inference"


def normalize_ollama_base_url(endpoint: str) -> str:
    """Point an Ollama server URL at its OpenAI-compatible ``/v1`` API."""
    base = endpoint.rstrip("/")
    return base if base.endswith("/v1") else f"{base}/v1"


def github_model_name(model: str) -> str:
    """GitHub Models expects publisher-qualified names such as ``openai/gpt-4o``."""
    return model if "/" in model else f"openai/{model}"


def build_azure_openai_model(model: str, settings: Settings) -> Model:
    """Create an Azure OpenAI chat model. ``model`` is the deployment name."""
    config = settings.azure_openai
    provider = AzureProvider(
        azure_endpoint=config.endpoint,
        api_version=config.api_version,
        api_key=config.api_key,
    )
    logger.debug(f"Creating Azure OpenAI model: deployment={model} endpoint={config.endpoint}")
    return OpenAIChatModel(model, provider=provider)


def build_openai_model(model: str, settings: Settings) -> Model:
    """Create an OpenAI chat model."""
    logger.debug(f"Creating OpenAI model: {model}")
    return OpenAIChatModel(model, provider=OpenAIProvider(api_key=settings.openai.api_key))


def build_ollama_model(model: str, settings: Settings) -> Model:
    """Create a chat model served by Ollama."""
    base_url = normalize_ollama_base_url(settings.ollama.endpoint or "")
    logger.debug(f"Creating Ollama model: {model} at {base_url}")
    return OpenAIChatModel(model, provider=OllamaProvider(base_url=base_url))


def build_github_models_model(model: str, settings: Settings) -> Model:
    """Create a chat model served by GitHub Models."""
    model_name = github_model_name(model)
    logger.debug(f"Creating GitHub Models model: {model_name} at {GITHUB_MODELS_ENDPOINT}")
    return OpenAIChatModel(model_name, provider=GitHubProvider(api_key=settings.github_models.api_key))


def build_bedrock_model(model: str, settings: Settings) -> Model:
    """Create an AWS Bedrock model using the Converse API."""
    region = settings.bedrock.region
    logger.debug(f"Creating AWS Bedrock model: {model} in {region}")
    return BedrockConverseModel(model, provider=BedrockProvider(region_name=region))


def build_anthropic_model(model: str, settings: Settings) -> Model:
    """Create an Anthropic model."""
    logger.debug(f"Creating Anthropic model: {model}")
    return AnthropicModel(model, provider=AnthropicProvider(api_key=settings.anthropic.api_key))


def build_google_ai_model(model: str, settings: Settings) -> Model:
    """Create a Gemini model through the Google AI (Generative Language) API."""
    logger.debug(f"Creating Google AI model: {model}")
    return GoogleModel(model, provider=GoogleProvider(api_key=settings.google_ai.api_key))


def build_cohere_model(model: str, settings: Settings) -> Model:
    """Create a Cohere model."""
    logger.debug(f"Creating Cohere model: {model}")
    return CohereModel(model, provider=CohereProvider(api_key=settings.cohere.api_key))


DEFAULT_MODEL_BUILDERS: Dict[AIService, ModelBuilder] = {
    AIService.AZURE_OPENAI: build_azure_openai_model,
    AIService.OPENAI: build_openai_model,
    AIService.OLLAMA: build_ollama_model,
    AIService.GITHUB_MODELS: build_github_models_model,
    AIService.AWS_BEDROCK: build_bedrock_model,
    AIService.ANTHROPIC: build_anthropic_model,
    AIService.GOOGLE_AI: build_google_ai_model,
    AIService.COHERE: build_cohere_model,
}


def to_model_messages(messages: Sequence[ChatMessage]) -> List[ModelMessage]:
    """Convert a conversation to pydantic-ai messages.

    System and user messages become requests, assistant messages become
    responses. Unknown roles are sent as user messages.

    Args:
        messages: Conversation in order

    Returns:
        List of pydantic-ai ModelMessage objects
    """
    converted: List[ModelMessage] = []
    for message in messages:
        role = ChatRole.parse(message.role)
        if role is ChatRole.SYSTEM:
            converted.append(ModelRequest(parts=[SystemPromptPart(content=message.content)]))
        elif role is ChatRole.ASSISTANT:
            converted.append(ModelResponse(parts=[TextPart(content=message.content)]))
        else:
            converted.append(ModelRequest(parts=[UserPromptPart(content=message.content)]))
    return converted


def response_text(response: ModelResponse) -> str:
    """Join the text parts of a model response."""
    return "".join(part.content for part in response.parts if isinstance(part, TextPart))
