"""Shared models of the AI client façade.

These are provider-independent: a conversation is a list of ``ChatMessage``,
a guarded call returns an ``EnterpriseAIResponse``, and each cached model
accumulates an ``AIClientMetrics`` record.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from dbchat_ai.core.models.base import CamelModel


class ChatRole(str, Enum):
    """Role of a message sender in a conversation."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"

    @classmethod
    def parse(cls, role: str) -> "ChatRole":
        """Map a free-form role to a ChatRole. Unknown roles are treated as ``user``."""
        try:
            return cls((role or "").strip().lower())
        except ValueError:
            return cls.USER


class ChatMessage(CamelModel):
    """One message of a conversation."""

    role: str = Field(default=ChatRole.USER.value, description="user, assistant or system")
    content: str = Field(default="", description="Message text")

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role=ChatRole.SYSTEM.value, content=content)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role=ChatRole.USER.value, content=content)


class EnterpriseAIResponse(CamelModel):
    """Outcome of a guarded AI call. Failures are reported, never raised."""

    is_successful: bool
    content: str = ""
    error_message: Optional[str] = None
    response_time_ms: int = 0
    token_count: int = 0


class AIClientMetrics(CamelModel):
    """Usage counters of one cached (model, service) client."""

    model: str
    service: str
    response_time_ms: int = 0
    token_count: int = 0
    last_used: Optional[datetime] = None
    success_count: int = 0
    error_count: int = 0
