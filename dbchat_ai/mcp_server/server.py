"""
DBChat MCP server.

Publishes the ``MCPToolset`` as Model Context Protocol tools over stdio, so
MCP clients (IDEs, agents) can ask the configured target database questions.
Tool results are camelCase JSON documents with ``isSuccessful`` and
``errorMessage``.

Run it with ``python -m dbchat_ai.mcp_server`` or the ``dbchat-ai-mcp``
script. The target database comes from ``MCP_DATABASE_TYPE`` and
``MCP_DATABASE_CONNECTION_STRING``.
"""

from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from dbchat_ai.ai import get_sql_generator
from dbchat_ai.core.logging_config import get_logger, setup_logging
from dbchat_ai.core.models.base import CamelModel
from dbchat_ai.core.monitoring import initialize_logfire
from dbchat_ai.datasource import get_database_service

from .tools import MCPToolset

logger = get_logger(__name__)

SERVER_NAME = "dbchat-ai"
SERVER_INSTRUCTIONS = (
    "Ask the configured relational database questions in natural language. "
    "Every tool needs the AI model and the AI service (AzureOpenAI, OpenAI, Ollama, GitHubModels, "
    "AWSBedrock, Anthropic, GoogleAI or Cohere) that writes the SQL."
)


def _document(result: CamelModel) -> Dict[str, Any]:
    return result.model_dump(by_alias=True, mode="json")


def build_mcp_server(toolset: MCPToolset) -> FastMCP:
    """Create a FastMCP server whose tools call ``toolset``."""
    server = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

    @server.tool(description="Translate a question into SQL for the configured database and run it.")
    async def execute_query(prompt: str, ai_model: str, ai_service: str) -> Dict[str, Any]:
        return _document(await toolset.execute_query(prompt, ai_model, ai_service))

    @server.tool(description="Translate a question into SQL for the configured database without running it.")
    async def generate_sql(prompt: str, ai_model: str, ai_service: str) -> Dict[str, Any]:
        return _document(await toolset.generate_sql(prompt, ai_model, ai_service))

    @server.tool(
        description=(
            "Generate an optimized query with performance analysis, run it within max_execution_time seconds "
            "and score its complexity. optimization_level is Basic, Intermediate, Advanced or Expert."
        )
    )
    async def execute_advanced_query(
        prompt: str,
        ai_model: str,
        ai_service: str,
        optimization_level: str = "Advanced",
        max_execution_time: int = 300,
    ) -> Dict[str, Any]:
        return _document(
            await toolset.execute_advanced_query(prompt, ai_model, ai_service, optimization_level, max_execution_time)
        )

    @server.tool(
        description=(
            "Rewrite a SQL query for better performance. "
            "performance_requirement is Performance, Memory or Comprehensive."
        )
    )
    async def optimize_query(
        sql_query: str, ai_model: str, ai_service: str, performance_requirement: str = "Comprehensive"
    ) -> Dict[str, Any]:
        return _document(await toolset.optimize_query(sql_query, ai_model, ai_service, performance_requirement))

    @server.tool(description="Review the schema of the configured database: design, indexing and performance.")
    async def analyze_schema(ai_model: str, ai_service: str, analysis_depth: str = "Comprehensive") -> Dict[str, Any]:
        return _document(await toolset.analyze_schema(ai_model, ai_service, analysis_depth))

    @server.tool(
        description=(
            "Answer several questions as one batch. With use_transaction the statements run in one "
            "transaction and any failure rolls all of them back."
        )
    )
    async def execute_batch_queries(
        prompts: List[str],
        ai_model: str,
        ai_service: str,
        use_transaction: bool = True,
        batch_timeout: int = 600,
    ) -> Dict[str, Any]:
        return _document(
            await toolset.execute_batch_queries(prompts, ai_model, ai_service, use_transaction, batch_timeout)
        )

    @server.tool(description="Find patterns, trends and optimization opportunities across past SQL queries.")
    async def analyze_query_patterns(
        historical_queries: List[str], ai_model: str, ai_service: str, timeframe_days: int = 30
    ) -> Dict[str, Any]:
        return _document(
            await toolset.analyze_query_patterns(historical_queries, ai_model, ai_service, timeframe_days)
        )

    @server.tool(description="List the tables and columns of the configured database.")
    async def get_schema() -> Dict[str, Any]:
        return _document(await toolset.get_schema())

    @server.tool(description="Check that the configured database is reachable.")
    async def get_status() -> Dict[str, Any]:
        return _document(await toolset.get_status())

    return server


def main(toolset: Optional[MCPToolset] = None) -> None:
    """Run the MCP server over stdio. Logs go to stderr."""
    setup_logging()
    initialize_logfire()
    toolset = toolset or MCPToolset.from_settings(get_sql_generator(), get_database_service())
    logger.info(f"Starting DBChat MCP server for {toolset.database_type or 'an unconfigured'} database")
    build_mcp_server(toolset).run(transport="stdio")
