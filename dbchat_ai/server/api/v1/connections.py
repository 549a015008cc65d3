"""
API endpoints for stored database connections.

Provides CRUD operations for registered target databases, their stored
schema snapshots and the natural-language query workflow over them. The
connection string is accepted on writes but never returned.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query, Request, status
from sqlalchemy.exc import IntegrityError

from dbchat_ai.core.database.base import utc_now
from dbchat_ai.core.database.entities import DatabaseConnection
from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.core.models.io import (
    ConnectionCreate,
    ConnectionQueryRequest,
    ConnectionRead,
    ConnectionStatusRead,
    ConnectionUpdate,
    QueryExecutionResult,
    StoredSchemaRead,
)
from dbchat_ai.datasource import DatabaseType, UnsupportedDatabaseTypeError
from dbchat_ai.server.services.deps import (
    DatabaseServiceDep,
    EnterpriseServiceDep,
    QueryWorkflowServiceDep,
    ReposDep,
    SchemaCatalogServiceDep,
)
from dbchat_ai.server.services.enterprise import to_audit_json

logger = get_logger(__name__)

router = APIRouter(tags=["connections"])

AUDIT_ENTITY = "DatabaseConnection"


def _audit_values(connection: DatabaseConnection) -> Dict[str, Any]:
    return ConnectionRead.model_validate(connection).model_dump(mode="json", by_alias=True)


def _canonical_type(database_type: str) -> str:
    try:
        return DatabaseType.parse(database_type).value
    except UnsupportedDatabaseTypeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


def _name_conflict(name: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"A database connection named '{name}' already exists",
    )


async def _get_or_404(repos: ReposDep, connection_id: uuid.UUID) -> DatabaseConnection:
    connection = await repos.connections.get_by_id(connection_id)
    if connection is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Database connection {connection_id} not found",
        )
    return connection


@router.get(
    "",
    response_model=List[ConnectionRead],
    summary="List Connections",
    description="List every stored database connection, oldest first.",
)
async def list_connections(repos: ReposDep) -> List[ConnectionRead]:
    connections = await repos.connections.get_all()
    return [ConnectionRead.model_validate(connection) for connection in connections]


@router.post(
    "",
    response_model=ConnectionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Connection",
    description="Register a target database. Names are unique.",
    responses={
        201: {"description": "Connection created successfully"},
        400: {"description": "Unsupported database type"},
        409: {"description": "A connection with this name already exists"},
    },
)
async def create_connection(
    payload: ConnectionCreate,
    request: Request,
    repos: ReposDep,
    enterprise: EnterpriseServiceDep,
) -> ConnectionRead:
    """
    Register a new target database.

    - **name**: Unique display name.
    - **databaseType**: MSSQL, MYSQL, POSTGRESQL, ORACLE or SQLITE.
    - **connectionString**: SQLAlchemy URL or ``Key=Value;`` connection string.
    - **isActive**: Inactive connections cannot run queries.
    """
    database_type = _canonical_type(payload.database_type)
    if await repos.connections.is_name_taken(payload.name):
        raise _name_conflict(payload.name)

    connection = DatabaseConnection(
        name=payload.name,
        database_type=database_type,
        connection_string=payload.connection_string,
        description=payload.description,
        is_active=payload.is_active,
        environment=payload.environment,
        created_by=payload.user_id,
        updated_by=payload.user_id,
    )
    try:
        connection = await repos.connections.create(connection)
    except IntegrityError as e:
        await repos.connections.session.rollback()
        raise _name_conflict(payload.name) from e
    logger.info(f"Created database connection {connection.name} ({connection.database_type})")

    await enterprise.log_audit_event(
        "CONNECTION_CREATED",
        AUDIT_ENTITY,
        connection.id,
        user_id=payload.user_id,
        user_name=payload.user_name,
        new_values=to_audit_json(_audit_values(connection)),
        request=request,
    )
    return ConnectionRead.model_validate(connection)


@router.get(
    "/{connection_id}",
    response_model=ConnectionRead,
    summary="Get Connection",
    responses={404: {"description": "Connection not found"}},
)
async def get_connection(connection_id: uuid.UUID, repos: ReposDep) -> ConnectionRead:
    return ConnectionRead.model_validate(await _get_or_404(repos, connection_id))


@router.put(
    "/{connection_id}",
    response_model=ConnectionRead,
    summary="Update Connection",
    description="Change a stored connection. Omitted fields keep their value.",
    responses={
        400: {"description": "Unsupported database type"},
        404: {"description": "Connection not found"},
        409: {"description": "A connection with this name already exists"},
    },
)
async def update_connection(
    connection_id: uuid.UUID,
    payload: ConnectionUpdate,
    request: Request,
    repos: ReposDep,
    enterprise: EnterpriseServiceDep,
) -> ConnectionRead:
    connection = await _get_or_404(repos, connection_id)
    old_values = _audit_values(connection)

    changes = payload.model_dump(exclude_unset=True, exclude={"user_id", "user_name"})
    if changes.get("name") and changes["name"] != connection.name:
        if await repos.connections.is_name_taken(changes["name"]):
            raise _name_conflict(changes["name"])
    if changes.get("database_type"):
        changes["database_type"] = _canonical_type(changes["database_type"])

    for field, value in changes.items():
        if value is not None:
            setattr(connection, field, value)
    connection.updated_by = payload.user_id or connection.updated_by
    new_name = connection.name
    try:
        connection = await repos.connections.update(connection)
    except IntegrityError as e:
        await repos.connections.session.rollback()
        raise _name_conflict(new_name) from e
    logger.info(f"Updated database connection {connection.name}")

    await enterprise.log_audit_event(
        "CONNECTION_UPDATED",
        AUDIT_ENTITY,
        connection.id,
        user_id=payload.user_id,
        user_name=payload.user_name,
        old_values=to_audit_json(old_values),
        new_values=to_audit_json(_audit_values(connection)),
        request=request,
    )
    return ConnectionRead.model_validate(connection)


@router.delete(
    "/{connection_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Connection",
    description="Soft delete a connection; it disappears from every listing.",
    responses={404: {"description": "Connection not found"}},
)
async def delete_connection(
    connection_id: uuid.UUID,
    request: Request,
    repos: ReposDep,
    enterprise: EnterpriseServiceDep,
    user_id: Optional[str] = Query(None, alias="userId", description="Acting user, recorded in the audit trail"),
) -> None:
    connection = await _get_or_404(repos, connection_id)
    old_values = _audit_values(connection)

    await repos.connections.delete(connection_id)
    logger.info(f"Deleted database connection {connection.name}")

    await enterprise.log_audit_event(
        "CONNECTION_DELETED",
        AUDIT_ENTITY,
        connection_id,
        user_id=user_id,
        old_values=to_audit_json(old_values),
        request=request,
    )


@router.get(
    "/{connection_id}/status",
    response_model=ConnectionStatusRead,
    summary="Test Connection",
    description="Check whether the stored connection currently answers.",
    responses={404: {"description": "Connection not found"}},
)
async def get_connection_status(
    connection_id: uuid.UUID, repos: ReposDep, database_service: DatabaseServiceDep
) -> ConnectionStatusRead:
    connection = await _get_or_404(repos, connection_id)
    is_connected = await database_service.test_connection(connection.database_type, connection.connection_string)
    return ConnectionStatusRead(
        id=connection.id,
        name=connection.name,
        database_type=connection.database_type,
        is_active=connection.is_active,
        is_connected=is_connected,
        checked_at=utc_now(),
    )


@router.post(
    "/{connection_id}/schema/refresh",
    response_model=StoredSchemaRead,
    summary="Refresh Stored Schema",
    description="Introspect the target database and replace the stored schema snapshot.",
    responses={
        400: {"description": "The target database could not be introspected"},
        404: {"description": "Connection not found"},
    },
)
async def refresh_schema(
    connection_id: uuid.UUID,
    request: Request,
    catalog: SchemaCatalogServiceDep,
    user_id: Optional[str] = Query(None, alias="userId", description="Acting user, recorded in the audit trail"),
) -> StoredSchemaRead:
    try:
        return await catalog.refresh_schema(connection_id, user_id=user_id, request=request)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Schema refresh of connection {connection_id} failed: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Schema refresh failed: {e}") from e


@router.get(
    "/{connection_id}/schema",
    response_model=StoredSchemaRead,
    summary="Get Stored Schema",
    responses={404: {"description": "Connection not found or no schema stored yet"}},
)
async def get_stored_schema(connection_id: uuid.UUID, catalog: SchemaCatalogServiceDep) -> StoredSchemaRead:
    try:
        stored = await catalog.get_stored_schema(connection_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    if stored is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No schema stored for database connection {connection_id}",
        )
    return stored


@router.post(
    "/{connection_id}/query",
    response_model=QueryExecutionResult,
    summary="Query a Stored Connection",
    description="Translate a question into SQL, run it and record the outcome in the query history.",
)
async def query_connection(
    connection_id: uuid.UUID,
    payload: ConnectionQueryRequest,
    request: Request,
    workflow: QueryWorkflowServiceDep,
) -> QueryExecutionResult:
    """
    Run the query workflow on a stored connection.

    Failures are reported with ``isSuccessful=false`` and an ``errorMessage``.
    """
    return await workflow.execute_query(
        connection_id,
        payload.prompt,
        payload.ai_model,
        payload.ai_service,
        session_id=payload.session_id,
        user_id=payload.user_id,
        request=request,
    )
