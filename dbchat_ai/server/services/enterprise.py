"""
Enterprise service.

Audit trail, user sessions and system configuration. Every method works on
the repositories of one request-scoped session.
"""

from __future__ import annotations

import json
import uuid
from datetime import timedelta
from typing import Any, Dict, List, Optional

from fastapi import Request

from dbchat_ai.core.database.base import utc_now
from dbchat_ai.core.database.entities import AuditLog, SystemConfiguration, UserSession
from dbchat_ai.core.database.repositories import Page, SqlRepoBundle
from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.server.core.config import settings

logger = get_logger(__name__)


def client_address(request: Optional[Request]) -> Optional[str]:
    if request is None or request.client is None:
        return None
    return request.client.host


def client_user_agent(request: Optional[Request]) -> Optional[str]:
    if request is None:
        return None
    return request.headers.get("user-agent")


def to_audit_json(values: Optional[Dict[str, Any]]) -> Optional[str]:
    """Serialize audit values; ``None`` stays ``None``."""
    if values is None:
        return None
    return json.dumps(values, default=str)


class EnterpriseService:
    """Audit trail, sessions and system configuration."""

    def __init__(self, repos: SqlRepoBundle, session_expiry_hours: Optional[int] = None) -> None:
        self.repos = repos
        self.session_expiry_hours = (
            session_expiry_hours if session_expiry_hours is not None else settings.enterprise.session_expiry_hours
        )

    # Audit trail

    async def log_audit_event(
        self,
        action: str,
        entity_name: str,
        entity_id: Optional[uuid.UUID] = None,
        user_id: Optional[str] = None,
        user_name: Optional[str] = None,
        old_values: Optional[str] = None,
        new_values: Optional[str] = None,
        additional_data: Optional[str] = None,
        request: Optional[Request] = None,
    ) -> AuditLog:
        """
        Append an entry to the audit trail.

        Args:
            action: What happened, e.g. ``CONNECTION_CREATED``
            entity_name: Kind of entity acted upon
            entity_id: ID of that entity
            user_id: Acting user
            user_name: Display name of the acting user
            old_values: JSON of the values before the change
            new_values: JSON of the values after the change
            additional_data: Free-form context
            request: Current request; supplies the client IP and User-Agent

        Returns:
            The persisted AuditLog
        """
        entry = AuditLog(
            action=action,
            entity_name=entity_name,
            entity_id=entity_id,
            user_id=user_id,
            user_name=user_name,
            old_values=old_values,
            new_values=new_values,
            ip_address=client_address(request),
            user_agent=client_user_agent(request),
            additional_data=additional_data,
        )
        entry = await self.repos.audit_logs.create(entry)
        logger.debug(f"Audit event {action} on {entity_name} {entity_id}")
        return entry

    async def get_audit_logs(
        self,
        from_date=None,
        to_date=None,
        user_id: Optional[str] = None,
        action: Optional[str] = None,
        page: int = 1,
        page_size: int = 50,
    ) -> Page[AuditLog]:
        """Search the audit trail, newest entries first."""
        return await self.repos.audit_logs.search(
            from_date=from_date, to_date=to_date, user_id=user_id, action=action, page=page, page_size=page_size
        )

    # User sessions

    async def create_user_session(
        self,
        session_id: str,
        user_id: Optional[str] = None,
        user_name: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        request: Optional[Request] = None,
    ) -> UserSession:
        """
        Register a client session.

        Args:
            session_id: Client-supplied session identifier
            user_id: User owning the session
            user_name: Display name of the user
            ip_address: Client address; taken from the request when omitted
            user_agent: Client User-Agent; taken from the request when omitted
            request: Current request

        Returns:
            The persisted UserSession
        """
        user_session = UserSession(
            session_id=session_id,
            user_id=user_id,
            user_name=user_name,
            ip_address=ip_address or client_address(request),
            user_agent=user_agent or client_user_agent(request),
            last_activity=utc_now(),
            is_active=True,
        )
        user_session = await self.repos.user_sessions.create(user_session)
        logger.info(f"Created user session {session_id}")
        return user_session

    async def update_user_session(
        self, session_id: str, user_id: Optional[str] = None, user_name: Optional[str] = None
    ) -> UserSession:
        """
        Touch a session and optionally reassign its user.

        Raises:
            LookupError: If no session has that identifier
        """
        user_session = await self.repos.user_sessions.get_by_session_id(session_id)
        if user_session is None:
            raise LookupError(f"User session {session_id} not found")

        user_session.last_activity = utc_now()
        if user_id is not None:
            user_session.user_id = user_id
        if user_name is not None:
            user_session.user_name = user_name
        return await self.repos.user_sessions.update(user_session)

    async def validate_user_session(self, session_id: str) -> bool:
        """
        Check that a session exists, is active and was used recently.

        A valid session's last activity is moved to now.

        Args:
            session_id: Client-supplied session identifier

        Returns:
            True when the session may still be used
        """
        user_session = await self.repos.user_sessions.get_by_session_id(session_id)
        if user_session is None or not user_session.is_active:
            return False

        now = utc_now()
        if user_session.last_activity < now - timedelta(hours=self.session_expiry_hours):
            logger.info(f"User session {session_id} expired")
            return False

        user_session.last_activity = now
        await self.repos.user_sessions.update(user_session)
        return True

    # System configuration

    async def get_system_configuration(self, key: str) -> Optional[SystemConfiguration]:
        return await self.repos.system_configurations.get_by_key(key)

    async def get_system_configurations(self, category: Optional[str] = None) -> List[SystemConfiguration]:
        """Get the configuration entries of a category, or all of them."""
        return await self.repos.system_configurations.list_by_category(category)

    async def set_system_configuration(
        self,
        key: str,
        value: str,
        category: Optional[str] = None,
        description: Optional[str] = None,
        is_encrypted: bool = False,
    ) -> SystemConfiguration:
        """
        Create or replace a configuration entry.

        An existing entry keeps its category and description when the new
        ones are None.
        """
        existing = await self.get_system_configuration(key)
        if existing is not None:
            existing.value = value
            existing.category = category if category is not None else existing.category
            existing.description = description if description is not None else existing.description
            existing.is_encrypted = is_encrypted
            return await self.repos.system_configurations.update(existing)

        entry = SystemConfiguration(
            key=key, value=value, category=category, description=description, is_encrypted=is_encrypted
        )
        return await self.repos.system_configurations.create(entry)
