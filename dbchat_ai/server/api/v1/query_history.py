"""
Query History Endpoints.

Read access to the queries run through the query workflow.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Query

from dbchat_ai.core.models.io import PagedResult, QueryHistoryRead
from dbchat_ai.server.services.deps import ReposDep

router = APIRouter(tags=["query-history"])


@router.get(
    "",
    response_model=PagedResult[QueryHistoryRead],
    summary="List Query History",
    description="Page through executed queries, newest first.",
    response_description="One page of query history entries.",
)
async def list_query_history(
    repos: ReposDep,
    connection_id: Optional[uuid.UUID] = Query(None, alias="connectionId", description="Only this connection"),
    user_id: Optional[str] = Query(None, alias="userId", description="Only this user"),
    session_id: Optional[str] = Query(None, alias="sessionId", description="Only this client session"),
    is_successful: Optional[bool] = Query(None, alias="isSuccessful", description="Only succeeded or failed queries"),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500, alias="pageSize"),
) -> PagedResult[QueryHistoryRead]:
    result = await repos.query_history.search(
        connection_id=connection_id,
        user_id=user_id,
        session_id=session_id,
        is_successful=is_successful,
        page=page,
        page_size=page_size,
    )
    return PagedResult[QueryHistoryRead].from_page(result, QueryHistoryRead)
