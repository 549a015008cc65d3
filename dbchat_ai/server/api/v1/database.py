"""
Database Connect Endpoints.

Ad-hoc access to a target database: test a connection string and discover
its schema without storing anything.
"""

from typing import List

from fastapi import APIRouter

from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.core.models.io import (
    DatabaseConnectRequest,
    DatabaseConnectResponse,
    DatabaseSchemaRead,
    TableSchemaRead,
)
from dbchat_ai.datasource import supported_types
from dbchat_ai.server.services.deps import DatabaseServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["database"])


@router.post(
    "/connect",
    response_model=DatabaseConnectResponse,
    summary="Connect to Database",
    description="Connect to a database and discover its schema. Failures are reported in `errorMessage`.",
    response_description="Connection outcome with the discovered schema.",
)
async def connect(payload: DatabaseConnectRequest, database_service: DatabaseServiceDep) -> DatabaseConnectResponse:
    """
    Connect to a database and load its schema.

    - **name**: Display name echoed back to the client.
    - **databaseType**: MSSQL, MYSQL, POSTGRESQL, ORACLE or SQLITE.
    - **connectionString**: SQLAlchemy URL or ``Key=Value;`` connection string.
    """
    try:
        snapshot = await database_service.get_database_schema(payload.database_type, payload.connection_string)
    except Exception as e:
        logger.error(f"Connecting to {payload.name} ({payload.database_type}) failed: {e}")
        return DatabaseConnectResponse(
            name=payload.name,
            database_type=payload.database_type,
            is_connected=False,
            error_message=str(e),
        )

    logger.info(f"Connected to {payload.name}: {len(snapshot.tables)} tables")
    return DatabaseConnectResponse(
        name=payload.name,
        database_type=payload.database_type,
        is_connected=True,
        db_schema=DatabaseSchemaRead(
            schema_raw=snapshot.schema_raw,
            tables=[TableSchemaRead(table_name=t.table_name, columns=t.columns) for t in snapshot.tables],
        ),
    )


@router.get(
    "/supported-types",
    response_model=List[str],
    summary="List Supported Database Types",
)
async def get_supported_types() -> List[str]:
    return supported_types()
