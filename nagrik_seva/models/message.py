"""
Assistant chat message models.
"""

from pydantic import Field
from datetime import datetime
from typing import Optional
from enum import Enum

from nagrik_seva.models.issue import CamelModel


class MessageRole(str, Enum):
    """Who authored a chat message."""
    USER = "user"
    ASSISTANT = "assistant"


class MessageCreate(CamelModel):
    """
    Model for posting a chat message.
    The client sends the author role under the `type` key.
    """
    content: str = Field(..., min_length=1, description="Message text")
    role: MessageRole = Field(..., alias="type", description="Message author: user or assistant")
    user_id: Optional[str] = Field(None, description="Sender identifier (optional)")


class Message(CamelModel):
    """Stored chat message."""
    id: int = Field(..., ge=1)
    role: MessageRole
    content: str
    created_at: datetime
    user_id: Optional[str] = None
