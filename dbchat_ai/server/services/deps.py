"""
Service Dependencies.

Annotated FastAPI dependencies shared by the API routers. Tests replace the
providers (``get_session``, ``get_ai_client``, ``get_sql_generator``,
``get_database_service``, ``get_mcp_toolset``) through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dbchat_ai.ai import EnterpriseAIClient, SQLQueryGenerator, get_ai_client, get_sql_generator
from dbchat_ai.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session
from dbchat_ai.core.database.session import get_session
from dbchat_ai.datasource import DatabaseService, get_database_service
from dbchat_ai.mcp_server import MCPToolset

from .enterprise import EnterpriseService
from .mcp import MCPService
from .query_workflow import QueryWorkflowService
from .schema_catalog import SchemaCatalogService

SessionDep = Annotated[AsyncSession, Depends(get_session)]
AIClientDep = Annotated[EnterpriseAIClient, Depends(get_ai_client)]
SQLGeneratorDep = Annotated[SQLQueryGenerator, Depends(get_sql_generator)]
DatabaseServiceDep = Annotated[DatabaseService, Depends(get_database_service)]


def get_sql_repos(session: SessionDep) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session)


ReposDep = Annotated[SqlRepoBundle, Depends(get_sql_repos)]


def get_enterprise_service(repos: ReposDep) -> EnterpriseService:
    return EnterpriseService(repos)


def get_query_workflow_service(
    repos: ReposDep, generator: SQLGeneratorDep, database_service: DatabaseServiceDep
) -> QueryWorkflowService:
    return QueryWorkflowService(repos, generator, database_service)


def get_mcp_service(
    repos: ReposDep, generator: SQLGeneratorDep, database_service: DatabaseServiceDep
) -> MCPService:
    return MCPService(repos, generator, database_service)


def get_mcp_toolset(generator: SQLGeneratorDep, database_service: DatabaseServiceDep) -> MCPToolset:
    """Toolset bound to the configured MCP target database."""
    return MCPToolset.from_settings(generator, database_service)


def get_schema_catalog_service(repos: ReposDep, database_service: DatabaseServiceDep) -> SchemaCatalogService:
    return SchemaCatalogService(repos, database_service)


EnterpriseServiceDep = Annotated[EnterpriseService, Depends(get_enterprise_service)]
QueryWorkflowServiceDep = Annotated[QueryWorkflowService, Depends(get_query_workflow_service)]
SchemaCatalogServiceDep = Annotated[SchemaCatalogService, Depends(get_schema_catalog_service)]
MCPServiceDep = Annotated[MCPService, Depends(get_mcp_service)]
MCPToolsetDep = Annotated[MCPToolset, Depends(get_mcp_toolset)]
