"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. They are separate from the database
entities so the API contract and the store can evolve independently.

Modules:
- common: error body and paged results
- database: ad-hoc connect and schema discovery
- ai: query generation, chat and enterprise AI endpoints
- connections: stored connections and the query workflow
- query_history: executed query records
- enterprise: audit trail, metrics, system configuration and sessions
- mcp: MCP tool endpoints and the status of the MCP target database
"""

from .ai import (
    AIMetricsResponse,
    AIQueryRequest,
    AIQueryResponse,
    AIValidationRequest,
    AIValidationResponse,
    ChatRequest,
    ChatResponse,
    EnterpriseQueryRequest,
    EnterpriseQueryResponse,
    ProviderStatusRead,
    QueryOptimizationRequest,
    QueryOptimizationResponse,
    QueryValidationRequest,
    QueryValidationResponse,
    SchemaAnalysisRequest,
    SchemaAnalysisResponse,
)
from .common import ErrorResponse, PagedResult
from .connections import (
    ConnectionCreate,
    ConnectionQueryRequest,
    ConnectionRead,
    ConnectionStatusRead,
    ConnectionUpdate,
    QueryExecutionResult,
    StoredSchemaRead,
)
from .database import DatabaseConnectRequest, DatabaseConnectResponse, DatabaseSchemaRead, TableSchemaRead
from .enterprise import (
    AuditLogRead,
    ConnectionCounts,
    CreateSessionRequest,
    DailyQueryStats,
    EnterpriseMetricsResponse,
    QueryMetrics,
    SystemConfigurationRead,
    SystemConfigurationRequest,
    UpdateSessionRequest,
    UserSessionRead,
)
from .mcp import (
    MCPConnectionStatus,
    MCPExecuteResponse,
    MCPGenerateSQLResponse,
    MCPQueryRequest,
    MCPRequest,
    MCPSchemaResponse,
    MCPStatusResponse,
)
from .query_history import QueryHistoryRead

__all__ = [
    "AIMetricsResponse",
    "AIQueryRequest",
    "AIQueryResponse",
    "AIValidationRequest",
    "AIValidationResponse",
    "AuditLogRead",
    "ChatRequest",
    "ChatResponse",
    "ConnectionCounts",
    "ConnectionCreate",
    "ConnectionQueryRequest",
    "ConnectionRead",
    "ConnectionStatusRead",
    "ConnectionUpdate",
    "CreateSessionRequest",
    "DailyQueryStats",
    "DatabaseConnectRequest",
    "DatabaseConnectResponse",
    "DatabaseSchemaRead",
    "EnterpriseMetricsResponse",
    "EnterpriseQueryRequest",
    "EnterpriseQueryResponse",
    "ErrorResponse",
    "MCPConnectionStatus",
    "MCPExecuteResponse",
    "MCPGenerateSQLResponse",
    "MCPQueryRequest",
    "MCPRequest",
    "MCPSchemaResponse",
    "MCPStatusResponse",
    "PagedResult",
    "ProviderStatusRead",
    "QueryExecutionResult",
    "QueryHistoryRead",
    "QueryMetrics",
    "QueryOptimizationRequest",
    "QueryOptimizationResponse",
    "QueryValidationRequest",
    "QueryValidationResponse",
    "SchemaAnalysisRequest",
    "SchemaAnalysisResponse",
    "StoredSchemaRead",
    "SystemConfigurationRead",
    "SystemConfigurationRequest",
    "TableSchemaRead",
    "UpdateSessionRequest",
    "UserSessionRead",
]
