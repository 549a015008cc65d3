"""
Model Context Protocol server of DBChat AI.

- ``tools``: ``MCPToolset``, the work behind every tool, bound to one target database
- ``server``: the FastMCP server publishing the toolset over stdio
- ``models``: tool results
"""

from .errors import McpToolError, TargetNotConfiguredError, ToolTimeoutError
from .server import build_mcp_server
from .tools import MCPToolset, score_performance

__all__ = [
    "MCPToolset",
    "McpToolError",
    "TargetNotConfiguredError",
    "ToolTimeoutError",
    "build_mcp_server",
    "score_performance",
]
