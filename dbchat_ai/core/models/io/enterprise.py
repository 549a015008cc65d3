"""
Enterprise endpoint I/O models.

Audit trail, usage metrics, system configuration and user sessions under
``/api/enterprise``.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import Field

from ..base import CamelModel
from .mcp import MCPConnectionStatus


class AuditLogRead(CamelModel):
    """Schema for reading an audit trail entry from API."""

    id: uuid.UUID
    action: str
    entity_name: str
    entity_id: Optional[uuid.UUID] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    old_values: Optional[str] = None
    new_values: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    additional_data: Optional[str] = None
    created_at: datetime


class SystemConfigurationRead(CamelModel):
    id: uuid.UUID
    key: str
    value: str
    category: Optional[str] = None
    description: Optional[str] = None
    is_encrypted: bool
    created_at: datetime
    updated_at: datetime


class SystemConfigurationRequest(CamelModel):
    """Create or replace the configuration entry named ``key``."""

    key: str = Field(min_length=1, max_length=100)
    value: str
    category: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    is_encrypted: bool = False
    user_id: Optional[str] = None
    user_name: Optional[str] = None


class UserSessionRead(CamelModel):
    id: uuid.UUID
    session_id: str
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    last_activity: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    is_active: bool
    created_at: datetime


class CreateSessionRequest(CamelModel):
    session_id: str = Field(min_length=1, max_length=100)
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    ip_address: Optional[str] = Field(default=None, description="Defaults to the client address of the request")
    user_agent: Optional[str] = Field(default=None, description="Defaults to the User-Agent header of the request")


class UpdateSessionRequest(CamelModel):
    user_id: Optional[str] = None
    user_name: Optional[str] = None


class QueryMetrics(CamelModel):
    """Query workflow usage over the reporting window."""

    total_queries: int = 0
    successful_queries: int = 0
    failed_queries: int = 0
    average_execution_time_ms: float = 0.0
    last_query_time: Optional[datetime] = None
    queries_by_model: Dict[str, int] = Field(default_factory=dict)
    queries_by_service: Dict[str, int] = Field(default_factory=dict)


class DailyQueryStats(CamelModel):
    date: date
    count: int
    successful: int


class ConnectionCounts(CamelModel):
    total: int
    active: int


class EnterpriseMetricsResponse(CamelModel):
    query_metrics: QueryMetrics
    connections: ConnectionCounts
    weekly_stats: List[DailyQueryStats] = Field(default_factory=list)
    connection_status: Optional[MCPConnectionStatus] = None
