"""
Question answering API endpoints.

Routes:
- POST /ai/query - One-shot question, answer text with appended sources
- POST /ai/conversation - Question inside a conversation
- POST /ai/focused - Question restricted to selected documents
- POST /ai/stream - Stream an answer using Server-Sent Events (SSE)

Dependencies: drive_qa.application.services.chat_service
System role: Q&A HTTP API with streaming support
"""

import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from drive_qa.api.deps import get_chat_service, get_user_id
from drive_qa.application.services.chat_service import ChatService
from drive_qa.core.exceptions import ConversationNotFoundError
from drive_qa.models.chat import (
    ChatAnswer,
    ConversationQueryRequest,
    FocusedQueryRequest,
    QueryRequest,
    QueryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/query", response_model=QueryResponse)
async def query(
    request: QueryRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> QueryResponse:
    """
    Answer a one-shot question from the indexed documents.

    Args:
        request: QueryRequest with the question
        chat_service: Injected ChatService

    Returns:
        QueryResponse: Answer text followed by a "Sources:" list
    """
    answer = await chat_service.ask(request.question)
    return QueryResponse(answer=answer)


@router.post("/conversation", response_model=ChatAnswer)
async def conversation_query(
    request: ConversationQueryRequest,
    user_id: str = Depends(get_user_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatAnswer:
    """
    Answer a question with conversational memory.

    Starts a new conversation when conversation_id is omitted.

    Raises:
        HTTPException(404): Conversation not found
    """
    try:
        return await chat_service.ask_with_conversation(
            request.question,
            conversation_id=request.conversation_id,
            user_id=user_id,
        )
    except ConversationNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/focused", response_model=ChatAnswer)
async def focused_query(
    request: FocusedQueryRequest,
    user_id: str = Depends(get_user_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatAnswer:
    """
    Answer a question using only the selected documents.

    Raises:
        HTTPException(404): Conversation not found
    """
    try:
        return await chat_service.ask_focused(
            request.question,
            document_ids=request.document_ids,
            conversation_id=request.conversation_id,
            user_id=user_id,
        )
    except ConversationNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/stream")
async def stream_query(
    request: QueryRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """Stream an answer using Server-Sent Events (SSE).

    SSE Format:
        event: context
        data: {"sources": [...]}

        event: token
        data: {"token": "...", "index": 0}

        event: complete
        data: {"full_answer": "...", "sources": [...]}

        event: error
        data: {"message": "..."}

    Args:
        request: QueryRequest with the question
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: SSE stream of answer events
    """
    logger.info(f"{__name__}:stream_query - START")

    async def event_generator() -> AsyncGenerator[str, None]:
        """Generate SSE events from the answer stream."""
        try:
            async for event in chat_service.stream(request.question):
                # Format as SSE: "event: {type}\ndata: {json}\n\n"
                yield f"event: {event.event.value}\ndata: {json.dumps(event.data)}\n\n"
            logger.info(f"{__name__}:stream_query - Stream completed")

        except Exception as e:
            logger.error(f"{__name__}:stream_query - {type(e).__name__}: {e}")
            error_data = json.dumps({"message": "Streaming failed"})
            yield f"event: error\ndata: {error_data}\n\n"

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )
