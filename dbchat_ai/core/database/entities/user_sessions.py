"""
User session entity model.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class UserSession(Base, table=True):
    """Client session tracked for activity and expiry.

    Table: user_sessions
    """

    __tablename__ = "user_sessions"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    session_id: str = Field(max_length=100, unique=True, description="Client-supplied session identifier")
    user_id: Optional[str] = Field(default=None, max_length=100)
    user_name: Optional[str] = Field(default=None, max_length=100)
    last_activity: datetime = Field(default_factory=utc_now)
    ip_address: Optional[str] = Field(default=None, max_length=50)
    user_agent: Optional[str] = Field(default=None, max_length=500)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: Optional[str] = Field(default=None, max_length=100)
    updated_by: Optional[str] = Field(default=None, max_length=100)
    is_deleted: bool = Field(default=False)

    def __repr__(self) -> str:
        return f"UserSession(id={self.id}, session_id={self.session_id}, user_id={self.user_id})"
