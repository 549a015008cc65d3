"""Exceptions raised by the AI client façade and the SQL generator."""


class UnsupportedAIServiceError(ValueError):
    """The requested AI service name is not one of the supported providers."""

    def __init__(self, service: str) -> None:
        super().__init__(f"Unsupported AI service: {service}")
        self.service = service


class AIServiceConfigurationError(RuntimeError):
    """A provider was requested but its required setting is missing."""

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"{setting_name} is not configured")
        self.setting_name = setting_name


class AIResponseParseError(ValueError):
    """The model answered, but not with the JSON document that was asked for."""

    def __init__(self, what: str, raw_response: str, reason: str) -> None:
        super().__init__(f"Failed to parse {what}: {raw_response}. Error: {reason}")
        self.raw_response = raw_response
