"""Shared fixtures of the AI layer tests."""

from typing import Callable, List

import pytest
from pydantic_ai.messages import ModelMessage, ModelResponse, TextPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

from dbchat_ai.server.core.config import Settings

PROVIDER_ENV_NAMES = (
    "AZURE_OPENAI_ENDPOINT",
    "AZURE_OPENAI_KEY",
    "OPENAI_KEY",
    "OLLAMA_ENDPOINT",
    "GITHUB_MODELS_KEY",
    "ANTHROPIC_KEY",
    "GOOGLE_AI_KEY",
    "COHERE_KEY",
)


@pytest.fixture(autouse=True)
def _no_provider_env(monkeypatch: pytest.MonkeyPatch):
    """Keep provider credentials of the developer shell out of the tests."""
    for name in PROVIDER_ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(**values) -> Settings:
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def recorded_messages() -> List[List[ModelMessage]]:
    return []


@pytest.fixture
def echo_model_factory(recorded_messages):
    """Build FunctionModels answering with fixed text and recording what they were sent."""

    def _factory(answer: str) -> FunctionModel:
        def respond(messages: List[ModelMessage], info: AgentInfo) -> ModelResponse:
            recorded_messages.append(list(messages))
            return ModelResponse(parts=[TextPart(content=answer)])

        return FunctionModel(respond)

    return _factory
