"""
Conversation API endpoints.

Routes:
- GET /conversations?user_id= - List a user's conversations
- GET /conversations/{conversation_id} - Get one conversation
- DELETE /conversations/{conversation_id} - Delete a conversation

Dependencies: drive_qa.core.conversation_store
System role: Conversation management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from drive_qa.api.deps import get_conversation_store, get_user_id
from drive_qa.core.conversation_store import ConversationStore
from drive_qa.models.chat import ConversationListResponse
from drive_qa.models.conversation import Conversation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.get("", response_model=ConversationListResponse)
async def list_conversations(
    user_id: str | None = Query(default=None, description="Owner; defaults to the X-User-ID header"),
    header_user_id: str = Depends(get_user_id),
    store: ConversationStore = Depends(get_conversation_store),
) -> ConversationListResponse:
    """List conversations owned by a user."""
    conversations = store.list_by_user(user_id or header_user_id)
    return ConversationListResponse(conversations=conversations, total=len(conversations))


@router.get("/{conversation_id}", response_model=Conversation)
async def get_conversation(
    conversation_id: str,
    store: ConversationStore = Depends(get_conversation_store),
) -> Conversation:
    """
    Get a conversation with its messages.

    Raises:
        HTTPException(404): Conversation not found
    """
    conversation = store.get(conversation_id)
    if conversation is None:
        raise HTTPException(status_code=404, detail=f"Conversation {conversation_id} not found")
    return conversation


@router.delete("/{conversation_id}", status_code=204)
async def delete_conversation(
    conversation_id: str,
    store: ConversationStore = Depends(get_conversation_store),
) -> None:
    """
    Delete a conversation.

    Raises:
        HTTPException(404): Conversation not found
    """
    if not store.delete(conversation_id):
        raise HTTPException(status_code=404, detail=f"Conversation {conversation_id} not found")
