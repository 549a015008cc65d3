"""
System configuration entity model.

Key/value settings editable at runtime through the enterprise API.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field

from ..base import Base, utc_now


class SystemConfiguration(Base, table=True):
    """Runtime configuration entry.

    Table: system_configurations
    """

    __tablename__ = "system_configurations"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    key: str = Field(max_length=100, unique=True)
    value: str = Field(sa_type=Text)
    category: Optional[str] = Field(default=None, max_length=100, index=True)
    description: Optional[str] = Field(default=None, max_length=500)
    is_encrypted: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: Optional[str] = Field(default=None, max_length=100)
    updated_by: Optional[str] = Field(default=None, max_length=100)
    is_deleted: bool = Field(default=False)

    def __repr__(self) -> str:
        return f"SystemConfiguration(key={self.key}, category={self.category})"
