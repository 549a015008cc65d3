"""Framework adapters of the AI client façade."""

from .pydantic_ai import (
    DEFAULT_MODEL_BUILDERS,
    GITHUB_MODELS_ENDPOINT,
    ModelBuilder,
    build_anthropic_model,
    build_azure_openai_model,
    build_bedrock_model,
    build_cohere_model,
    build_github_models_model,
    build_google_ai_model,
    build_ollama_model,
    build_openai_model,
    github_model_name,
    normalize_ollama_base_url,
    response_text,
    to_model_messages,
)

__all__ = [
    "DEFAULT_MODEL_BUILDERS",
    "GITHUB_MODELS_ENDPOINT",
    "ModelBuilder",
    "build_anthropic_model",
    "build_azure_openai_model",
    "build_bedrock_model",
    "build_cohere_model",
    "build_github_models_model",
    "build_google_ai_model",
    "build_ollama_model",
    "build_openai_model",
    "github_model_name",
    "normalize_ollama_base_url",
    "response_text",
    "to_model_messages",
]
