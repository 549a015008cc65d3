"""Unit tests for the FastMCP server wiring."""

import json
from unittest.mock import MagicMock, patch

import pytest

from dbchat_ai.mcp_server import MCPToolset, build_mcp_server
from dbchat_ai.mcp_server import server as server_module

TOOL_NAMES = {
    "execute_query",
    "generate_sql",
    "execute_advanced_query",
    "optimize_query",
    "analyze_schema",
    "execute_batch_queries",
    "analyze_query_patterns",
    "get_schema",
    "get_status",
}


@pytest.fixture
def toolset(sql_generator, database_service, target_db_url) -> MCPToolset:
    return MCPToolset(sql_generator, database_service, "SQLITE", target_db_url)


def text_of(call_result) -> str:
    """Text of the first content block of a tool call."""
    content = call_result[0] if isinstance(call_result, tuple) else call_result
    return content[0].text


async def test_tools_are_registered(toolset):
    server = build_mcp_server(toolset)

    tools = {tool.name: tool for tool in await server.list_tools()}

    assert server.name == "dbchat-ai"
    assert set(tools) == TOOL_NAMES
    batch_schema = tools["execute_batch_queries"].inputSchema
    assert batch_schema["properties"]["prompts"]["type"] == "array"
    assert set(batch_schema["required"]) == {"prompts", "ai_model", "ai_service"}


async def test_call_tool_returns_camel_case_document(toolset):
    server = build_mcp_server(toolset)

    document = json.loads(text_of(await server.call_tool("get_status", {})))

    assert document["isConnected"] is True
    assert document["databaseType"] == "SQLITE"


async def test_call_query_tool(toolset):
    server = build_mcp_server(toolset)

    arguments = {"prompt": "list users", "ai_model": "gpt-4o", "ai_service": "OpenAI"}

    document = json.loads(text_of(await server.call_tool("execute_query", arguments)))

    assert document["isSuccessful"] is True
    assert document["generatedSql"] == "SELECT id, name FROM users ORDER BY id"
    assert document["rowsReturned"] == 3


def test_main_runs_over_stdio(toolset):
    fake_server = MagicMock()
    with (
        patch.object(server_module, "setup_logging"),
        patch.object(server_module, "initialize_logfire"),
        patch.object(server_module, "build_mcp_server", return_value=fake_server) as build,
    ):
        server_module.main(toolset)

    build.assert_called_once_with(toolset)
    fake_server.run.assert_called_once_with(transport="stdio")
