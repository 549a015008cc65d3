"""
MCP endpoint I/O models.

Contracts of ``/api/mcp/*`` and ``/api/enterprise/mcp/*``. The ``/api/mcp``
request fields are checked by the endpoints themselves so a missing field
answers 400 with a message naming it.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from dbchat_ai.core.database.base import utc_now

from ..base import CamelModel


class MCPRequest(CamelModel):
    """Question against the database named in the body."""

    prompt: Optional[str] = None
    ai_model: Optional[str] = None
    ai_platform: Optional[str] = Field(default=None, description="AI service name, e.g. OpenAI")
    database_type: Optional[str] = None
    database_connection_string: Optional[str] = None


class MCPExecuteResponse(CamelModel):
    query: str = ""
    results: List[List[str]] = Field(default_factory=list)
    is_successful: bool = False
    error_message: Optional[str] = None


class MCPGenerateSQLResponse(CamelModel):
    query: str = ""
    is_successful: bool = False
    error_message: Optional[str] = None


class MCPSchemaResponse(CamelModel):
    schema_raw: List[str] = Field(default_factory=list)
    is_successful: bool = False
    error_message: Optional[str] = None


class MCPStatusResponse(CamelModel):
    is_connected: bool = False
    error_message: Optional[str] = None


class MCPConnectionStatus(CamelModel):
    """Reachability of the database the MCP tools work against."""

    is_connected: bool = False
    database_type: str = ""
    error_message: Optional[str] = None
    last_checked: datetime = Field(default_factory=utc_now)


class MCPQueryRequest(CamelModel):
    """Question against the first active stored connection."""

    prompt: str = Field(min_length=1)
    ai_model: str = Field(min_length=1)
    ai_platform: str = Field(min_length=1, description="AI service name, e.g. OpenAI")
    session_id: Optional[str] = None
    user_id: Optional[str] = None
