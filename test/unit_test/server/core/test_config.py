"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds the variables documented in the
.env.example file and that the grouped configuration views agree with the
flat settings.
"""

from pathlib import Path
from typing import Dict

import pytest
from dotenv import dotenv_values

from dbchat_ai.server.core.config import (
    AzureOpenAIConfig,
    CORSConfig,
    EnterpriseConfig,
    MCPConfig,
    OpenAIConfig,
    Settings,
)


@pytest.fixture
def env_example_path() -> Path:
    """Get path to .env.example file."""
    return Path(__file__).resolve().parents[4] / ".env.example"


@pytest.fixture
def env_example_vars(env_example_path: Path) -> Dict[str, str]:
    return {key: value for key, value in dotenv_values(env_example_path).items() if value is not None}


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, env_example_vars):
    """Drop process variables that would shadow the example file."""
    for key in env_example_vars:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def example_settings(clean_env, env_example_path: Path) -> Settings:
    return Settings(_env_file=env_example_path)


class TestEnvExample:
    def test_every_setting_is_documented(self, env_example_vars):
        aliases = {field.alias for field in Settings.model_fields.values()}
        missing = aliases - set(env_example_vars)
        assert not missing, f"Settings missing from .env.example: {sorted(missing)}"

    def test_server_values(self, example_settings, env_example_vars):
        assert example_settings.server_host == env_example_vars["DBCHAT_AI_SERVER_HOST"]
        assert example_settings.server_port == int(env_example_vars["DBCHAT_AI_SERVER_PORT"])
        assert example_settings.log_level == env_example_vars["DBCHAT_AI_LOG_LEVEL"]

    def test_provider_values(self, example_settings, env_example_vars):
        assert example_settings.openai_key == env_example_vars["OPENAI_KEY"]
        assert example_settings.azure_openai_endpoint == env_example_vars["AZURE_OPENAI_ENDPOINT"]
        assert example_settings.ollama_endpoint == env_example_vars["OLLAMA_ENDPOINT"]
        assert example_settings.aws_region == env_example_vars["AWS_REGION"]

    def test_list_values_are_parsed(self, example_settings):
        assert example_settings.cors_origins == [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://localhost:4173",
        ]
        assert example_settings.cors_allow_methods == ["*"]

    def test_logfire_variables_are_ignored(self, example_settings):
        assert not hasattr(example_settings, "LOGFIRE_ENABLED")


class TestDefaults:
    def test_defaults_without_env(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.server_port == 8000
        assert settings.database_url == "sqlite+aiosqlite:///./dbchat_ai.db"
        assert settings.openai_key is None
        assert settings.azure_openai_api_version == "2024-10-21"
        assert settings.session_expiry_hours == 24
        assert settings.ai_result_cache_ttl_minutes == 30
        assert settings.query_metrics_window_days == 30

    def test_environment_variables_win(self, clean_env, monkeypatch: pytest.MonkeyPatch, env_example_path):
        monkeypatch.setenv("OPENAI_KEY", "from-env")
        assert Settings(_env_file=env_example_path).openai_key == "from-env"

    def test_field_names_are_accepted(self, clean_env):
        settings = Settings(_env_file=None, openai_key="by-name", session_expiry_hours=2)
        assert settings.openai_key == "by-name"
        assert settings.session_expiry_hours == 2


class TestGroupedViews:
    def test_views_follow_flat_values(self, clean_env):
        settings = Settings(
            _env_file=None,
            AZURE_OPENAI_ENDPOINT="https://mock.openai.azure.com",
            AZURE_OPENAI_KEY="az-key",
            OPENAI_KEY="oa-key",
            SESSION_EXPIRY_HOURS=4,
            CORS_ORIGINS=["http://localhost:8080"],
            DATABASE_URL="sqlite+aiosqlite:///:memory:",
        )

        assert isinstance(settings.azure_openai, AzureOpenAIConfig)
        assert settings.azure_openai.endpoint == "https://mock.openai.azure.com"
        assert settings.azure_openai.api_key == "az-key"
        assert isinstance(settings.openai, OpenAIConfig)
        assert settings.openai.api_key == "oa-key"
        assert isinstance(settings.enterprise, EnterpriseConfig)
        assert settings.enterprise.session_expiry_hours == 4
        assert isinstance(settings.cors, CORSConfig)
        assert settings.cors.origins == ["http://localhost:8080"]
        assert settings.database.url == "sqlite+aiosqlite:///:memory:"
        assert settings.bedrock.region == "us-east-1"

    def test_unconfigured_provider_views(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.ollama.endpoint is None
        assert settings.github_models.api_key is None
        assert settings.anthropic.api_key is None
        assert settings.google_ai.api_key is None
        assert settings.cohere.api_key is None

    def test_mcp_view(self, clean_env):
        settings = Settings(
            _env_file=None, MCP_DATABASE_TYPE="SQLITE", MCP_DATABASE_CONNECTION_STRING="sqlite:///./target.db"
        )
        assert isinstance(settings.mcp, MCPConfig)
        assert settings.mcp.database_type == "SQLITE"
        assert settings.mcp.connection_string == "sqlite:///./target.db"
        assert Settings(_env_file=None).mcp.connection_string is None
