"""
Audit log entity model.

Audit rows are append-only records of who did what to which entity. Old and
new values are stored as JSON text.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field

from ..base import Base, utc_now


class AuditLog(Base, table=True):
    """Audit trail entry.

    Table: audit_logs
    """

    __tablename__ = "audit_logs"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    action: str = Field(max_length=50, index=True, description="e.g. QUERY_EXECUTED, SYSTEM_CONFIG_UPDATED")
    entity_name: str = Field(max_length=100, index=True)
    entity_id: Optional[uuid.UUID] = Field(default=None, index=True)
    user_id: Optional[str] = Field(default=None, max_length=100, index=True)
    user_name: Optional[str] = Field(default=None, max_length=100)
    old_values: Optional[str] = Field(default=None, sa_type=Text)
    new_values: Optional[str] = Field(default=None, sa_type=Text)
    ip_address: Optional[str] = Field(default=None, max_length=50)
    user_agent: Optional[str] = Field(default=None, max_length=500)
    additional_data: Optional[str] = Field(default=None, max_length=1000)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: Optional[str] = Field(default=None, max_length=100)
    updated_by: Optional[str] = Field(default=None, max_length=100)
    is_deleted: bool = Field(default=False)

    def __repr__(self) -> str:
        return f"AuditLog(id={self.id}, action={self.action}, entity={self.entity_name})"
