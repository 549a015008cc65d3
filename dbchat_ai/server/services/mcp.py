"""
MCP service.

MCP queries from the enterprise endpoints run against the first active stored
connection (in name order). They leave the same query history as the
connection workflow and are audited as ``MCP_QUERY_EXECUTED`` or
``MCP_QUERY_FAILED``.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from dbchat_ai.ai import SQLQueryGenerator
from dbchat_ai.core.database.base import utc_now
from dbchat_ai.core.database.entities import DatabaseConnection
from dbchat_ai.core.database.repositories import SqlRepoBundle
from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.core.models.io import MCPConnectionStatus, QueryExecutionResult
from dbchat_ai.datasource import DatabaseService

from .enterprise import EnterpriseService, to_audit_json
from .query_workflow import QueryWorkflowService

logger = get_logger(__name__)

NO_ACTIVE_CONNECTION = "No active database connection found"


class MCPService:
    """MCP queries and status over the stored connections."""

    def __init__(
        self,
        repos: SqlRepoBundle,
        generator: SQLQueryGenerator,
        database_service: DatabaseService,
    ) -> None:
        self.repos = repos
        self.database_service = database_service
        self.enterprise = EnterpriseService(repos)
        self.workflow = QueryWorkflowService(repos, generator, database_service)

    async def get_active_connection(self) -> Optional[DatabaseConnection]:
        connections = await self.repos.connections.list_active()
        return connections[0] if connections else None

    async def execute_query(
        self,
        prompt: str,
        model: str,
        service: str,
        session_id: Optional[str] = None,
        user_id: Optional[str] = None,
        request: Optional[Request] = None,
    ) -> QueryExecutionResult:
        """
        Answer a question against the first active connection.

        Args:
            prompt: Question in natural language
            model: Model or deployment name
            service: AI service name
            session_id: Client session the query belongs to
            user_id: Acting user
            request: Current request

        Returns:
            QueryExecutionResult; failures are reported in it, never raised
        """
        logger.info(f"Executing MCP query with model {model} on {service}")
        connection = await self.get_active_connection()
        if connection is None:
            logger.warning(NO_ACTIVE_CONNECTION)
            await self.enterprise.log_audit_event(
                "MCP_QUERY_FAILED",
                "QueryHistory",
                None,
                user_id=user_id,
                new_values=to_audit_json(
                    {"prompt": prompt, "aiModel": model, "aiService": service, "error": NO_ACTIVE_CONNECTION}
                ),
                request=request,
            )
            return QueryExecutionResult(is_successful=False, error_message=NO_ACTIVE_CONNECTION, executed_at=utc_now())

        return await self.workflow.execute_query(
            connection.id,
            prompt,
            model,
            service,
            session_id=session_id,
            user_id=user_id,
            request=request,
            audit_action_prefix="MCP_QUERY",
        )

    async def get_connection_status(self) -> MCPConnectionStatus:
        """Whether the first active connection answers."""
        connection = await self.get_active_connection()
        if connection is None:
            return MCPConnectionStatus(error_message=NO_ACTIVE_CONNECTION)

        is_connected = await self.database_service.test_connection(
            connection.database_type, connection.connection_string
        )
        return MCPConnectionStatus(
            is_connected=is_connected,
            database_type=connection.database_type,
            error_message=None if is_connected else f"Cannot connect to database connection '{connection.name}'",
        )
