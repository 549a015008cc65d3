"""AI service catalogue and provider configuration validation.

This module names the AI services the client façade can talk to, maps each of
them to the setting it cannot work without, and validates that setting before
a model is built so a misconfigured provider fails with a precise message
instead of an SDK error.

References:
- Azure OpenAI: https://learn.microsoft.com/azure/ai-services/openai/
- GitHub Models: https://docs.github.com/github-models
- Amazon Bedrock: https://docs.aws.amazon.com/bedrock/
- Pydantic AI models: https://ai.pydantic.dev/models/overview/
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple

from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.server.core.config import Settings

from .errors import AIServiceConfigurationError, UnsupportedAIServiceError

logger = get_logger(__name__)


class AIService(str, Enum):
    """Enumeration of supported AI services."""

    AZURE_OPENAI = "azureopenai"
    OPENAI = "openai"
    OLLAMA = "ollama"
    GITHUB_MODELS = "githubmodels"
    AWS_BEDROCK = "awsbedrock"
    ANTHROPIC = "anthropic"
    GOOGLE_AI = "googleai"
    COHERE = "cohere"

    def __str__(self) -> str:
        """Return the string value of the service."""
        return self.value

    @classmethod
    def parse(cls, name: str) -> "AIService":
        """Resolve a service name case-insensitively.

        Args:
            name: Service name as sent by clients, e.g. ``AzureOpenAI`` or ``awsbedrock``

        Returns:
            Matching AIService

        Raises:
            UnsupportedAIServiceError: If no service has that name
        """
        if isinstance(name, cls):
            return name
        normalized = (name or "").strip().lower()
        for service in cls:
            if service.value == normalized:
                return service
        raise UnsupportedAIServiceError(name)


# Names used by clients when listing models
SERVICE_DISPLAY_NAMES: Dict[AIService, str] = {
    AIService.AZURE_OPENAI: "AzureOpenAI",
    AIService.OPENAI: "OpenAI",
    AIService.OLLAMA: "Ollama",
    AIService.GITHUB_MODELS: "GitHubModels",
    AIService.AWS_BEDROCK: "AWSBedrock",
    AIService.ANTHROPIC: "Anthropic",
    AIService.GOOGLE_AI: "GoogleAI",
    AIService.COHERE: "Cohere",
}

# Models offered by GET /api/ai/models, keyed by display name
AVAILABLE_MODELS: Dict[str, List[str]] = {
    "AzureOpenAI": ["gpt-4", "gpt-4o", "gpt-35-turbo"],
    "OpenAI": ["gpt-4", "gpt-4o", "gpt-3.5-turbo"],
    "Ollama": ["llama2", "codellama", "mistral"],
    "GitHubModels": ["gpt-4", "gpt-4o", "gpt-3.5-turbo"],
    "AWSBedrock": ["anthropic.claude-3-sonnet-20240229-v1:0", "anthropic.claude-3-haiku-20240307-v1:0"],
}

# Setting each service cannot be built without: (environment name, Settings attribute).
# Bedrock authenticates through the AWS credential chain and its region has a default.
PROVIDER_REQUIRED_SETTINGS: Dict[AIService, Optional[Tuple[str, str]]] = {
    AIService.AZURE_OPENAI: ("AZURE_OPENAI_ENDPOINT", "azure_openai_endpoint"),
    AIService.OPENAI: ("OPENAI_KEY", "openai_key"),
    AIService.OLLAMA: ("OLLAMA_ENDPOINT", "ollama_endpoint"),
    AIService.GITHUB_MODELS: ("GITHUB_MODELS_KEY", "github_models_key"),
    AIService.AWS_BEDROCK: None,
    AIService.ANTHROPIC: ("ANTHROPIC_KEY", "anthropic_key"),
    AIService.GOOGLE_AI: ("GOOGLE_AI_KEY", "google_ai_key"),
    AIService.COHERE: ("COHERE_KEY", "cohere_key"),
}


class ProviderConfigValidator:
    """Validator for AI provider settings."""

    @staticmethod
    def get_required_setting(service: AIService) -> Optional[str]:
        """Get the environment name of the setting a service requires.

        Args:
            service: AIService value

        Returns:
            Environment variable name, or None when nothing is required
        """
        requirement = PROVIDER_REQUIRED_SETTINGS.get(service)
        return requirement[0] if requirement else None

    @staticmethod
    def is_configured(service: AIService, settings: Settings) -> bool:
        """Check whether the required setting of a service has a value.

        Args:
            service: AIService value
            settings: Application settings

        Returns:
            True if the service can be built, False otherwise
        """
        requirement = PROVIDER_REQUIRED_SETTINGS.get(service)
        if requirement is None:
            return True
        _, attribute = requirement
        return bool(getattr(settings, attribute, None))

    @staticmethod
    def validate(service: AIService, settings: Settings) -> None:
        """Validate that the required setting of a service is present.

        Args:
            service: AIService value
            settings: Application settings

        Raises:
            AIServiceConfigurationError: If the required setting is missing
        """
        if not ProviderConfigValidator.is_configured(service, settings):
            raise AIServiceConfigurationError(ProviderConfigValidator.get_required_setting(service))

    @staticmethod
    def get_configuration_status(settings: Settings) -> Dict[AIService, bool]:
        """Check every service.

        Args:
            settings: Application settings

        Returns:
            Dictionary mapping services to configuration status
        """
        return {service: ProviderConfigValidator.is_configured(service, settings) for service in AIService}

    @staticmethod
    def get_missing_services(settings: Settings) -> List[AIService]:
        """Get the services whose required setting is missing."""
        return [service for service, ok in ProviderConfigValidator.get_configuration_status(settings).items() if not ok]

    @staticmethod
    def log_configuration_status(settings: Settings) -> None:
        """Log which services are usable with the current settings."""
        logger.debug("AI service configuration status:")
        for service, configured in ProviderConfigValidator.get_configuration_status(settings).items():
            status = "configured" if configured else f"missing {ProviderConfigValidator.get_required_setting(service)}"
            logger.debug(f"  {SERVICE_DISPLAY_NAMES[service]}: {status}")
