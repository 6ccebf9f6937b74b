"""
Conversation domain models.

Multi-turn dialogue state kept by the conversation store.

Dependencies: pydantic
System role: Conversation data structures
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

MessageRole = Literal["user", "assistant", "system"]


class ConversationMessage(BaseModel):
    """Single message in a conversation."""

    role: MessageRole = Field(description="Message role: 'user', 'assistant' or 'system'")
    content: str = Field(description="Message content")
    timestamp: datetime = Field(description="When the message was appended")


class Conversation(BaseModel):
    """Append-only message history owned by one user."""

    id: str
    user_id: str
    messages: list[ConversationMessage] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
