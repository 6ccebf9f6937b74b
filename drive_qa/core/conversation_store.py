"""
In-memory conversation store.

Keeps per-user, append-only message histories for the lifetime of the
process. Conversation ids have the form "{user_id}-{epoch_millis}".

Dependencies: drive_qa.models.conversation, drive_qa.core.exceptions
System role: Conversation state for multi-turn Q&A
"""

import logging
import time
from datetime import datetime, timezone
from typing import get_args

from drive_qa.core.exceptions import ConversationNotFoundError, ValidationError
from drive_qa.models.conversation import Conversation, ConversationMessage, MessageRole

logger = logging.getLogger(__name__)

_VALID_ROLES = frozenset(get_args(MessageRole))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ConversationStore:
    """
    Process-local conversation storage.

    Callers receive copies; the stored histories only change through
    add_message() and delete().
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._conversations: dict[str, Conversation] = {}
        self._last_stamp_ms = 0

    def __len__(self) -> int:
        return len(self._conversations)

    def _next_stamp_ms(self) -> int:
        # Bump when the clock repeats or steps back so ids stay unique
        stamp = int(time.time() * 1000)
        if stamp <= self._last_stamp_ms:
            stamp = self._last_stamp_ms + 1
        self._last_stamp_ms = stamp
        return stamp

    def create(self, user_id: str) -> str:
        """
        Create an empty conversation.

        Args:
            user_id: Owner of the conversation

        Returns:
            str: New conversation id
        """
        conversation_id = f"{user_id}-{self._next_stamp_ms()}"
        now = _utc_now()
        self._conversations[conversation_id] = Conversation(
            id=conversation_id,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        logger.info(f"{__name__}:create - Created conversation {conversation_id} for user {user_id}")
        return conversation_id

    def add_message(self, conversation_id: str, role: str, content: str) -> Conversation:
        """
        Append a message to a conversation.

        Args:
            conversation_id: Target conversation
            role: "user", "assistant" or "system"
            content: Message text

        Returns:
            Conversation: Copy of the updated conversation

        Raises:
            ConversationNotFoundError: When the id is unknown
            ValidationError: When the role is not recognised
        """
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)
        if role not in _VALID_ROLES:
            raise ValidationError(f"Invalid role: {role}", field="role")

        now = _utc_now()
        conversation.messages.append(ConversationMessage(role=role, content=content, timestamp=now))
        conversation.updated_at = max(now, conversation.created_at)
        return conversation.model_copy(deep=True)

    def get(self, conversation_id: str) -> Conversation | None:
        """Return a copy of a conversation, or None when unknown."""
        conversation = self._conversations.get(conversation_id)
        return conversation.model_copy(deep=True) if conversation else None

    def get_history(self, conversation_id: str, limit: int | None = None) -> list[ConversationMessage]:
        """
        Return the messages of a conversation, oldest first.

        Args:
            conversation_id: Target conversation
            limit: Only the most recent N messages when positive (None = all)

        Returns:
            list[ConversationMessage]: Message copies

        Raises:
            ConversationNotFoundError: When the id is unknown
        """
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)

        messages = conversation.messages
        if limit is not None and limit > 0:
            messages = messages[-limit:]
        return [message.model_copy() for message in messages]

    def list_by_user(self, user_id: str) -> list[Conversation]:
        """Return copies of a user's conversations in creation order."""
        return [
            conversation.model_copy(deep=True)
            for conversation in self._conversations.values()
            if conversation.user_id == user_id
        ]

    def delete(self, conversation_id: str) -> bool:
        """
        Delete a conversation.

        Returns:
            bool: True when a conversation was removed
        """
        removed = self._conversations.pop(conversation_id, None) is not None
        if removed:
            logger.info(f"{__name__}:delete - Deleted conversation {conversation_id}")
        return removed
