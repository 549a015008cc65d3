"""
Enterprise Endpoints.

Audit trail, usage metrics, system configuration, user sessions and MCP
queries against the first active stored connection.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Request, status

from dbchat_ai.core.database.entities import DatabaseConnection
from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.core.models.io import (
    AuditLogRead,
    ConnectionCounts,
    CreateSessionRequest,
    EnterpriseMetricsResponse,
    MCPConnectionStatus,
    MCPQueryRequest,
    PagedResult,
    QueryExecutionResult,
    SystemConfigurationRead,
    SystemConfigurationRequest,
    UpdateSessionRequest,
    UserSessionRead,
)
from dbchat_ai.server.services.deps import EnterpriseServiceDep, MCPServiceDep, QueryWorkflowServiceDep, ReposDep
from dbchat_ai.server.services.enterprise import to_audit_json

logger = get_logger(__name__)

router = APIRouter(tags=["enterprise"])


@router.get(
    "/audit-logs",
    response_model=PagedResult[AuditLogRead],
    summary="Search Audit Trail",
    description="Page through audit entries, newest first.",
)
async def get_audit_logs(
    enterprise: EnterpriseServiceDep,
    from_date: Optional[datetime] = Query(None, alias="fromDate", description="Inclusive lower bound (UTC)"),
    to_date: Optional[datetime] = Query(None, alias="toDate", description="Inclusive upper bound (UTC)"),
    user_id: Optional[str] = Query(None, alias="userId"),
    action: Optional[str] = Query(None, description="e.g. CONNECTION_CREATED"),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500, alias="pageSize"),
) -> PagedResult[AuditLogRead]:
    result = await enterprise.get_audit_logs(
        from_date=from_date, to_date=to_date, user_id=user_id, action=action, page=page, page_size=page_size
    )
    return PagedResult[AuditLogRead].from_page(result, AuditLogRead)


@router.get(
    "/metrics",
    response_model=EnterpriseMetricsResponse,
    summary="Usage Metrics",
    description=(
        "Query workflow statistics, connection counts, queries per day over the last week "
        "and the status of the MCP connection."
    ),
)
async def get_metrics(
    repos: ReposDep, workflow: QueryWorkflowServiceDep, mcp: MCPServiceDep
) -> EnterpriseMetricsResponse:
    return EnterpriseMetricsResponse(
        query_metrics=await workflow.get_metrics(),
        connections=ConnectionCounts(
            total=await repos.connections.count(),
            active=await repos.connections.count(DatabaseConnection.is_active == True),  # noqa: E712
        ),
        weekly_stats=await workflow.get_weekly_stats(),
        connection_status=await mcp.get_connection_status(),
    )


@router.get(
    "/system-config",
    response_model=List[SystemConfigurationRead],
    summary="List System Configuration",
)
async def get_system_configurations(
    enterprise: EnterpriseServiceDep,
    category: Optional[str] = Query(None, description="Only entries of this category"),
) -> List[SystemConfigurationRead]:
    entries = await enterprise.get_system_configurations(category)
    return [SystemConfigurationRead.model_validate(entry) for entry in entries]


@router.get(
    "/system-config/{key}",
    response_model=SystemConfigurationRead,
    summary="Get System Configuration Entry",
    responses={404: {"description": "No entry with this key"}},
)
async def get_system_configuration(key: str, enterprise: EnterpriseServiceDep) -> SystemConfigurationRead:
    entry = await enterprise.get_system_configuration(key)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"System configuration '{key}' not found")
    return SystemConfigurationRead.model_validate(entry)


@router.post(
    "/system-config",
    response_model=SystemConfigurationRead,
    summary="Set System Configuration Entry",
    description="Create the entry named `key`, or replace its value when it exists.",
)
async def set_system_configuration(
    payload: SystemConfigurationRequest, request: Request, enterprise: EnterpriseServiceDep
) -> SystemConfigurationRead:
    entry = await enterprise.set_system_configuration(
        payload.key,
        payload.value,
        category=payload.category,
        description=payload.description,
        is_encrypted=payload.is_encrypted,
    )
    logger.info(f"System configuration {entry.key} updated")

    await enterprise.log_audit_event(
        "SYSTEM_CONFIG_UPDATED",
        "SystemConfiguration",
        entry.id,
        user_id=payload.user_id,
        user_name=payload.user_name,
        new_values=to_audit_json({"key": entry.key, "category": entry.category}),
        request=request,
    )
    return SystemConfigurationRead.model_validate(entry)


@router.post(
    "/session",
    response_model=UserSessionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create User Session",
    responses={409: {"description": "A session with this identifier already exists"}},
)
async def create_session(
    payload: CreateSessionRequest, request: Request, repos: ReposDep, enterprise: EnterpriseServiceDep
) -> UserSessionRead:
    """
    Register a client session.

    The client address and User-Agent are taken from the request unless the
    body supplies them.
    """
    if await repos.user_sessions.get_by_session_id(payload.session_id) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"User session {payload.session_id} already exists",
        )
    user_session = await enterprise.create_user_session(
        payload.session_id,
        user_id=payload.user_id,
        user_name=payload.user_name,
        ip_address=payload.ip_address,
        user_agent=payload.user_agent,
        request=request,
    )
    return UserSessionRead.model_validate(user_session)


@router.put(
    "/session/{session_id}",
    response_model=UserSessionRead,
    summary="Update User Session",
    description="Record activity on a session and optionally change its user.",
    responses={404: {"description": "Session not found"}},
)
async def update_session(
    session_id: str, payload: UpdateSessionRequest, enterprise: EnterpriseServiceDep
) -> UserSessionRead:
    try:
        user_session = await enterprise.update_user_session(
            session_id, user_id=payload.user_id, user_name=payload.user_name
        )
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return UserSessionRead.model_validate(user_session)


@router.get(
    "/session/{session_id}/validate",
    response_model=bool,
    summary="Validate User Session",
    description="True when the session exists, is active and has not expired.",
)
async def validate_session(session_id: str, enterprise: EnterpriseServiceDep) -> bool:
    return await enterprise.validate_user_session(session_id)


@router.get(
    "/mcp/status",
    response_model=MCPConnectionStatus,
    summary="MCP Connection Status",
    description="Whether the first active stored connection answers.",
)
async def get_mcp_status(mcp: MCPServiceDep) -> MCPConnectionStatus:
    return await mcp.get_connection_status()


@router.post(
    "/mcp/query",
    response_model=QueryExecutionResult,
    summary="MCP Query",
    description=(
        "Answer a question against the first active stored connection. "
        "The query is recorded in the history and audited as MCP_QUERY_EXECUTED or MCP_QUERY_FAILED."
    ),
)
async def execute_mcp_query(payload: MCPQueryRequest, request: Request, mcp: MCPServiceDep) -> QueryExecutionResult:
    return await mcp.execute_query(
        payload.prompt,
        payload.ai_model,
        payload.ai_platform,
        session_id=payload.session_id,
        user_id=payload.user_id,
        request=request,
    )
