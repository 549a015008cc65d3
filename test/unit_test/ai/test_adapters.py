"""Unit tests for the pydantic-ai adapter of the AI client."""

import pytest
from pydantic_ai.messages import (
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models.openai import OpenAIChatModel

from dbchat_ai.ai.adapters import (
    DEFAULT_MODEL_BUILDERS,
    build_github_models_model,
    build_ollama_model,
    build_openai_model,
    github_model_name,
    normalize_ollama_base_url,
    response_text,
    to_model_messages,
)
from dbchat_ai.ai.base import ChatMessage
from dbchat_ai.ai.providers import AIService


class TestHelpers:
    @pytest.mark.parametrize(
        "endpoint,expected",
        [
            ("http://localhost:11434", "http://localhost:11434/v1"),
            ("http://localhost:11434/", "http://localhost:11434/v1"),
            ("http://localhost:11434/v1", "http://localhost:11434/v1"),
            ("http://localhost:11434/v1/", "http://localhost:11434/v1"),
        ],
    )
    def test_normalize_ollama_base_url(self, endpoint, expected):
        assert normalize_ollama_base_url(endpoint) == expected

    def test_github_model_name(self):
        assert github_model_name("gpt-4o") == "openai/gpt-4o"
        assert github_model_name("meta/llama-3-70b") == "meta/llama-3-70b"


def test_every_service_has_a_builder():
    assert set(DEFAULT_MODEL_BUILDERS) == set(AIService)


class TestBuilders:
    def test_openai(self, make_settings):
        model = build_openai_model("gpt-4o", make_settings(OPENAI_KEY="sk-test"))
        assert isinstance(model, OpenAIChatModel)
        assert model.model_name == "gpt-4o"

    def test_ollama(self, make_settings):
        model = build_ollama_model("llama2", make_settings(OLLAMA_ENDPOINT="http://localhost:11434"))
        assert isinstance(model, OpenAIChatModel)
        assert model.model_name == "llama2"
        assert model.base_url.rstrip("/") == "http://localhost:11434/v1"

    def test_github_models_qualifies_name(self, make_settings):
        model = build_github_models_model("gpt-4o", make_settings(GITHUB_MODELS_KEY="ghp-test"))
        assert model.model_name == "openai/gpt-4o"

    def test_github_models_keeps_qualified_name(self, make_settings):
        model = build_github_models_model("meta/llama-3-70b", make_settings(GITHUB_MODELS_KEY="ghp-test"))
        assert model.model_name == "meta/llama-3-70b"


class TestMessageConversion:
    def test_roles_map_to_requests_and_responses(self):
        converted = to_model_messages(
            [
                ChatMessage(role="system", content="You write SQL"),
                ChatMessage(role="user", content="count users"),
                ChatMessage(role="assistant", content="SELECT COUNT(1) FROM users"),
                ChatMessage(role="User", content="and orders?"),
            ]
        )

        assert len(converted) == 4
        assert isinstance(converted[0], ModelRequest)
        assert isinstance(converted[0].parts[0], SystemPromptPart)
        assert converted[0].parts[0].content == "You write SQL"
        assert isinstance(converted[1].parts[0], UserPromptPart)
        assert isinstance(converted[2], ModelResponse)
        assert converted[2].parts[0].content == "SELECT COUNT(1) FROM users"
        assert isinstance(converted[3].parts[0], UserPromptPart)

    def test_unknown_role_is_sent_as_user(self):
        converted = to_model_messages([ChatMessage(role="tool", content="x")])
        assert isinstance(converted[0], ModelRequest)
        assert isinstance(converted[0].parts[0], UserPromptPart)

    def test_empty_conversation(self):
        assert to_model_messages([]) == []

    def test_response_text_joins_text_parts(self):
        response = ModelResponse(parts=[TextPart(content="SELECT 1"), TextPart(content=";")])
        assert response_text(response) == "SELECT 1;"
