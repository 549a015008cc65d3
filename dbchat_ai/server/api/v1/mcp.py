"""
MCP Endpoints.

HTTP face of the MCP tools. ``execute`` and ``generate-sql`` work against the
database named in the request body; ``schema`` and ``status`` report on the
configured MCP target database. A missing request field answers 400; any
other failure answers 200 with ``isSuccessful`` false and ``errorMessage``.
"""

from fastapi import APIRouter, HTTPException, status

from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.core.models.io import (
    MCPExecuteResponse,
    MCPGenerateSQLResponse,
    MCPRequest,
    MCPSchemaResponse,
    MCPStatusResponse,
)
from dbchat_ai.mcp_server import MCPToolset
from dbchat_ai.server.services.deps import DatabaseServiceDep, MCPToolsetDep, SQLGeneratorDep

logger = get_logger(__name__)

router = APIRouter(tags=["mcp"])

REQUIRED_FIELDS = (
    ("database_connection_string", "databaseConnectionString"),
    ("database_type", "databaseType"),
    ("ai_model", "aiModel"),
    ("ai_platform", "aiPlatform"),
    ("prompt", "prompt"),
)


def _require_fields(payload: MCPRequest) -> None:
    for attribute, field_name in REQUIRED_FIELDS:
        if not (getattr(payload, attribute) or "").strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{field_name} is required")


@router.post(
    "/execute",
    response_model=MCPExecuteResponse,
    summary="Generate and Run SQL",
    description="Translate a question into SQL for the database in the body and run it.",
    responses={400: {"description": "A required field is missing"}},
)
async def execute(
    payload: MCPRequest, generator: SQLGeneratorDep, database_service: DatabaseServiceDep
) -> MCPExecuteResponse:
    _require_fields(payload)
    toolset = MCPToolset(generator, database_service, payload.database_type, payload.database_connection_string)
    result = await toolset.execute_query(payload.prompt, payload.ai_model, payload.ai_platform)
    return MCPExecuteResponse(
        query=result.generated_sql,
        results=result.results,
        is_successful=result.is_successful,
        error_message=result.error_message,
    )


@router.post(
    "/generate-sql",
    response_model=MCPGenerateSQLResponse,
    summary="Generate SQL",
    description="Translate a question into SQL for the database in the body without running it.",
    responses={400: {"description": "A required field is missing"}},
)
async def generate_sql(
    payload: MCPRequest, generator: SQLGeneratorDep, database_service: DatabaseServiceDep
) -> MCPGenerateSQLResponse:
    _require_fields(payload)
    toolset = MCPToolset(generator, database_service, payload.database_type, payload.database_connection_string)
    result = await toolset.generate_sql(payload.prompt, payload.ai_model, payload.ai_platform)
    return MCPGenerateSQLResponse(
        query=result.generated_sql, is_successful=result.is_successful, error_message=result.error_message
    )


@router.get(
    "/schema",
    response_model=MCPSchemaResponse,
    summary="MCP Target Schema",
    description="Schema lines of the configured MCP target database.",
)
async def get_schema(toolset: MCPToolsetDep) -> MCPSchemaResponse:
    result = await toolset.get_schema()
    return MCPSchemaResponse(
        schema_raw=result.schema_raw, is_successful=result.is_successful, error_message=result.error_message
    )


@router.get(
    "/status",
    response_model=MCPStatusResponse,
    summary="MCP Target Status",
    description="Whether the configured MCP target database is reachable.",
)
async def get_status(toolset: MCPToolsetDep) -> MCPStatusResponse:
    result = await toolset.get_status()
    return MCPStatusResponse(is_connected=result.is_connected, error_message=result.error_message)
