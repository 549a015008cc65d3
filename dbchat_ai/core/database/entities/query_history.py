"""
Query history entity model.

Every natural-language query run against a registered connection leaves one
row here, whether the generated SQL succeeded or not.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field

from ..base import Base, utc_now


class QueryHistory(Base, table=True):
    """Executed (or attempted) query.

    Table: query_history
    """

    __tablename__ = "query_history"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # What was asked and what the model produced
    user_prompt: str = Field(sa_type=Text)
    generated_sql: str = Field(default="", sa_type=Text)
    ai_model: str = Field(max_length=50)
    ai_service: str = Field(max_length=50)

    # Outcome
    execution_time_ms: int = Field(default=0)
    is_successful: bool = Field(default=False, index=True)
    error_message: Optional[str] = Field(default=None, max_length=1000)
    rows_returned: int = Field(default=0)

    # Ownership
    database_connection_id: uuid.UUID = Field(foreign_key="database_connections.id", ondelete="CASCADE")
    user_id: Optional[str] = Field(default=None, max_length=100, index=True)
    session_id: Optional[str] = Field(default=None, max_length=100, index=True)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: Optional[str] = Field(default=None, max_length=100)
    updated_by: Optional[str] = Field(default=None, max_length=100)
    is_deleted: bool = Field(default=False)

    def __repr__(self) -> str:
        return f"QueryHistory(id={self.id}, model={self.ai_model}, successful={self.is_successful})"
