"""
Query history I/O models.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from ..base import CamelModel


class QueryHistoryRead(CamelModel):
    """Schema for reading a query history entry from API."""

    id: uuid.UUID
    user_prompt: str
    generated_sql: str
    ai_model: str
    ai_service: str
    execution_time_ms: int
    is_successful: bool
    error_message: Optional[str] = None
    rows_returned: int
    database_connection_id: uuid.UUID
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    created_at: datetime
