"""
Chat domain models and schemas.

Request/response schemas for question answering.

Dependencies: pydantic
System role: Q&A API contracts
"""

from pydantic import BaseModel, Field

from drive_qa.models.conversation import Conversation


class Source(BaseModel):
    """Document cited by an answer."""

    document_id: str
    document_name: str


class Answer(BaseModel):
    """Generated answer with deduplicated sources."""

    answer: str
    sources: list[Source] = Field(default_factory=list)


class ChatAnswer(Answer):
    """Answer produced inside a conversation."""

    conversation_id: str | None = None


class QueryRequest(BaseModel):
    """Request schema for a one-shot question."""

    question: str = Field(min_length=1, description="User question")


class QueryResponse(BaseModel):
    """Response schema for a one-shot question."""

    answer: str = Field(description="Answer text followed by the source list")


class ConversationQueryRequest(BaseModel):
    """Request schema for a question asked inside a conversation."""

    question: str = Field(min_length=1, description="User question")
    conversation_id: str | None = Field(
        default=None,
        description="Existing conversation; a new one is created when omitted",
    )


class FocusedQueryRequest(ConversationQueryRequest):
    """Request schema for a question restricted to selected documents."""

    document_ids: list[str] = Field(description="Only these documents are searched")


class IndexBuildRequest(BaseModel):
    """Request schema for triggering an index build."""

    force: bool = Field(default=False, description="Rebuild even if the index is fresh")


class ConversationListResponse(BaseModel):
    """Response schema for a user's conversations."""

    conversations: list[Conversation]
    total: int = Field(description="Total number of conversations")
