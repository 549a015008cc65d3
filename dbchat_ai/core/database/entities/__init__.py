"""
Database entity models.

Each module maps one table, or a group of tables that form one business
domain. Importing this package registers every table with the SQLModel
metadata.

Modules:
- database_connections: Registered target databases
- database_schemas: Schema catalog snapshots (schemas, tables, columns)
- query_history: Executed natural-language queries
- user_sessions: Client sessions
- system_configurations: Runtime key/value settings
- audit_logs: Audit trail
"""

from .audit_logs import AuditLog
from .database_connections import DatabaseConnection, DatabaseConnectionBase
from .database_schemas import DatabaseColumn, DatabaseSchema, DatabaseTable
from .query_history import QueryHistory
from .system_configurations import SystemConfiguration
from .user_sessions import UserSession

__all__ = [
    "AuditLog",
    "DatabaseColumn",
    "DatabaseConnection",
    "DatabaseConnectionBase",
    "DatabaseSchema",
    "DatabaseTable",
    "QueryHistory",
    "SystemConfiguration",
    "UserSession",
]
