"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
sharing one session, for services that touch several tables per request.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .audit_logs import AuditLogRepository
from .database_connections import DatabaseConnectionRepository
from .database_schemas import DatabaseSchemaRepository
from .query_history import QueryHistoryRepository
from .system_configurations import SystemConfigurationRepository
from .user_sessions import UserSessionRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    connections: DatabaseConnectionRepository
    schemas: DatabaseSchemaRepository
    query_history: QueryHistoryRepository
    user_sessions: UserSessionRepository
    system_configurations: SystemConfigurationRepository
    audit_logs: AuditLogRepository


def build_sql_repos_from_session(*, session: AsyncSession) -> SqlRepoBundle:
    """Build a SqlRepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        connections=DatabaseConnectionRepository(session),
        schemas=DatabaseSchemaRepository(session),
        query_history=QueryHistoryRepository(session),
        user_sessions=UserSessionRepository(session),
        system_configurations=SystemConfigurationRepository(session),
        audit_logs=AuditLogRepository(session),
    )
