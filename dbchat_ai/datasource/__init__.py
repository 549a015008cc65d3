"""
Access to the databases users connect to.

The application store lives in ``dbchat_ai.core.database``; this package
talks to the *target* databases the AI writes SQL for.
"""

from .connection import DatabaseType, UnsupportedDatabaseTypeError, build_connection_url, supported_types
from .models import BatchExecutionResult, BatchQueryItem, ColumnDetail, SchemaSnapshot, TableDetail, TableSchema
from .service import DatabaseService, get_database_service

__all__ = [
    "BatchExecutionResult",
    "BatchQueryItem",
    "ColumnDetail",
    "DatabaseService",
    "DatabaseType",
    "SchemaSnapshot",
    "TableDetail",
    "TableSchema",
    "UnsupportedDatabaseTypeError",
    "build_connection_url",
    "get_database_service",
    "supported_types",
]
