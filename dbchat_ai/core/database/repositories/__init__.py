"""
Database repository layer using SQLModel.

Every repository builds on ``SQLModelRepository``, the generic async
implementation of ``AsyncBaseRepository`` with soft deletion and paging, and
adds the lookups its domain needs.

Modules:
- base: Repository interface, generic implementation, Page and QueryBuilder
- database_connections: Registered target databases
- database_schemas: Schema catalog snapshots
- query_history: Executed queries
- user_sessions: Client sessions
- system_configurations: Runtime settings
- audit_logs: Audit trail search
- bundle: All repositories over one session
"""

from .audit_logs import AuditLogRepository
from .base import AsyncBaseRepository, Page, QueryBuilder, SQLModelRepository
from .bundle import SqlRepoBundle, build_sql_repos_from_session
from .database_connections import DatabaseConnectionRepository
from .database_schemas import DatabaseSchemaRepository
from .query_history import QueryHistoryRepository
from .system_configurations import SystemConfigurationRepository
from .user_sessions import UserSessionRepository

__all__ = [
    "AsyncBaseRepository",
    "AuditLogRepository",
    "DatabaseConnectionRepository",
    "DatabaseSchemaRepository",
    "Page",
    "QueryBuilder",
    "QueryHistoryRepository",
    "SQLModelRepository",
    "SqlRepoBundle",
    "SystemConfigurationRepository",
    "UserSessionRepository",
    "build_sql_repos_from_session",
]
