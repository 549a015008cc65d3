"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
All configuration is loaded from environment variables and the .env file.

Provider credentials keep the flat key names the AI services are known by
(``OPENAI_KEY``, ``AZURE_OPENAI_ENDPOINT`` ...). The grouped views returned by the
``Settings`` properties re-validate the flat values through the same aliases.
"""

from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# AI Provider Configuration Models
# =====================================================================


class AzureOpenAIConfig(BaseModel):
    """Azure OpenAI configuration."""

    endpoint: Optional[str] = Field(
        default=None, alias="AZURE_OPENAI_ENDPOINT", description="Azure OpenAI resource endpoint"
    )
    api_key: Optional[str] = Field(default=None, alias="AZURE_OPENAI_KEY", description="Azure OpenAI API key")
    api_version: str = Field(
        default="2024-10-21", alias="AZURE_OPENAI_API_VERSION", description="Azure OpenAI REST API version"
    )

    model_config = {"populate_by_name": True}


class OpenAIConfig(BaseModel):
    """OpenAI API configuration."""

    api_key: Optional[str] = Field(default=None, alias="OPENAI_KEY", description="OpenAI API key")

    model_config = {"populate_by_name": True}


class OllamaConfig(BaseModel):
    """Ollama server configuration."""

    endpoint: Optional[str] = Field(
        default=None, alias="OLLAMA_ENDPOINT", description="Ollama server URL, e.g. http://localhost:11434"
    )

    model_config = {"populate_by_name": True}


class GitHubModelsConfig(BaseModel):
    """GitHub Models configuration."""

    api_key: Optional[str] = Field(
        default=None, alias="GITHUB_MODELS_KEY", description="GitHub token with models access"
    )

    model_config = {"populate_by_name": True}


class BedrockConfig(BaseModel):
    """AWS Bedrock configuration. Credentials come from the standard AWS chain."""

    region: str = Field(default="us-east-1", alias="AWS_REGION", description="AWS region for Bedrock runtime")

    model_config = {"populate_by_name": True}


class AnthropicConfig(BaseModel):
    """Anthropic API configuration."""

    api_key: Optional[str] = Field(default=None, alias="ANTHROPIC_KEY", description="Anthropic API key")

    model_config = {"populate_by_name": True}


class GoogleAIConfig(BaseModel):
    """Google AI (Gemini API) configuration."""

    api_key: Optional[str] = Field(default=None, alias="GOOGLE_AI_KEY", description="Google AI API key")

    model_config = {"populate_by_name": True}


class CohereConfig(BaseModel):
    """Cohere API configuration."""

    api_key: Optional[str] = Field(default=None, alias="COHERE_KEY", description="Cohere API key")

    model_config = {"populate_by_name": True}


# =====================================================================
# Infrastructure Configuration Models
# =====================================================================


class DatabaseConfig(BaseModel):
    """Application store configuration."""

    url: str = Field(
        default="sqlite+aiosqlite:///./dbchat_ai.db",
        alias="DATABASE_URL",
        description="Async SQLAlchemy URL of the application database",
    )
    echo: bool = Field(default=False, alias="DATABASE_ECHO", description="Echo SQL statements to the log")

    model_config = {"populate_by_name": True}


class MCPConfig(BaseModel):
    """Target database of the MCP tools and of the ``/api/mcp`` schema and status endpoints."""

    database_type: Optional[str] = Field(
        default=None, alias="MCP_DATABASE_TYPE", description="MSSQL, MYSQL, POSTGRESQL, ORACLE or SQLITE"
    )
    connection_string: Optional[str] = Field(
        default=None,
        alias="MCP_DATABASE_CONNECTION_STRING",
        description="SQLAlchemy URL or Key=Value; connection string of the target database",
    )

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173", "http://localhost:4173"],
        alias="CORS_ORIGINS",
        description="Allowed CORS origins",
    )
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: List[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods")
    allow_headers: List[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers")

    model_config = {"populate_by_name": True}


class EnterpriseConfig(BaseModel):
    """Session, caching and reporting windows."""

    session_expiry_hours: int = Field(
        default=24, alias="SESSION_EXPIRY_HOURS", description="Hours of inactivity after which a session is invalid"
    )
    ai_result_cache_ttl_minutes: int = Field(
        default=30,
        alias="AI_RESULT_CACHE_TTL_MINUTES",
        description="How long generated enterprise queries are served from cache",
    )
    query_metrics_window_days: int = Field(
        default=30, alias="QUERY_METRICS_WINDOW_DAYS", description="Look-back window of the query metrics report"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are bound from environment variables and the .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # DBChat AI Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="DBChat AI server host address to bind to",
        alias="DBCHAT_AI_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="DBChat AI server port number",
        alias="DBCHAT_AI_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="DBCHAT_AI_LOG_LEVEL",
    )
    log_format: str = Field(default="detailed", description="simple, detailed or json", alias="LOG_FORMAT")
    log_file_dir: str = Field(default="logs", description="Directory of the log file", alias="LOG_FILE_DIR")
    enable_file_logging: bool = Field(
        default=False, description="Also write logs to LOG_FILE_DIR", alias="ENABLE_FILE_LOGGING"
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./dbchat_ai.db",
        description="Async SQLAlchemy URL of the application database",
        alias="DATABASE_URL",
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # =====================================================================
    # AI Provider Configuration
    # =====================================================================
    azure_openai_endpoint: Optional[str] = Field(default=None, alias="AZURE_OPENAI_ENDPOINT")
    azure_openai_key: Optional[str] = Field(default=None, alias="AZURE_OPENAI_KEY")
    azure_openai_api_version: str = Field(default="2024-10-21", alias="AZURE_OPENAI_API_VERSION")
    openai_key: Optional[str] = Field(default=None, alias="OPENAI_KEY")
    ollama_endpoint: Optional[str] = Field(default=None, alias="OLLAMA_ENDPOINT")
    github_models_key: Optional[str] = Field(default=None, alias="GITHUB_MODELS_KEY")
    aws_region: str = Field(default="us-east-1", alias="AWS_REGION")
    anthropic_key: Optional[str] = Field(default=None, alias="ANTHROPIC_KEY")
    google_ai_key: Optional[str] = Field(default=None, alias="GOOGLE_AI_KEY")
    cohere_key: Optional[str] = Field(default=None, alias="COHERE_KEY")

    # =====================================================================
    # CORS Configuration
    # =====================================================================
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173", "http://localhost:4173"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: List[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: List[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # =====================================================================
    # MCP Target Database
    # =====================================================================
    mcp_database_type: Optional[str] = Field(default=None, alias="MCP_DATABASE_TYPE")
    mcp_database_connection_string: Optional[str] = Field(default=None, alias="MCP_DATABASE_CONNECTION_STRING")

    # =====================================================================
    # Enterprise Features
    # =====================================================================
    session_expiry_hours: int = Field(default=24, alias="SESSION_EXPIRY_HOURS")
    ai_result_cache_ttl_minutes: int = Field(default=30, alias="AI_RESULT_CACHE_TTL_MINUTES")
    query_metrics_window_days: int = Field(default=30, alias="QUERY_METRICS_WINDOW_DAYS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def azure_openai(self) -> AzureOpenAIConfig:
        """Get Azure OpenAI configuration."""
        return AzureOpenAIConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def openai(self) -> OpenAIConfig:
        """Get OpenAI configuration."""
        return OpenAIConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def ollama(self) -> OllamaConfig:
        """Get Ollama configuration."""
        return OllamaConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def github_models(self) -> GitHubModelsConfig:
        """Get GitHub Models configuration."""
        return GitHubModelsConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def bedrock(self) -> BedrockConfig:
        """Get AWS Bedrock configuration."""
        return BedrockConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def anthropic(self) -> AnthropicConfig:
        """Get Anthropic configuration."""
        return AnthropicConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def google_ai(self) -> GoogleAIConfig:
        """Get Google AI configuration."""
        return GoogleAIConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cohere(self) -> CohereConfig:
        """Get Cohere configuration."""
        return CohereConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def database(self) -> DatabaseConfig:
        """Get application database configuration."""
        return DatabaseConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def mcp(self) -> MCPConfig:
        """Get MCP target database configuration."""
        return MCPConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def enterprise(self) -> EnterpriseConfig:
        """Get session, caching and reporting configuration."""
        return EnterpriseConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
