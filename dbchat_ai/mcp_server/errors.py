from __future__ import annotations


class McpToolError(Exception):
    pass


class TargetNotConfiguredError(McpToolError):
    def __init__(self, setting_name: str) -> None:
        super().__init__(f"{setting_name} is not set in the configuration.")
        self.setting_name = setting_name


class ToolTimeoutError(McpToolError):
    def __init__(self, what: str, seconds: float) -> None:
        super().__init__(f"{what} did not finish within {seconds:g} seconds")
