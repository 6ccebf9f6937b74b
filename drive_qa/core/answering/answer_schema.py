"""
Answer generator working schemas.

Dependencies: pydantic
System role: Intermediate data passed between retrieval and completion
"""

from pydantic import BaseModel, Field

from drive_qa.models.chat import Source


class AnswerContext(BaseModel):
    """
    Retrieval outcome prepared for the completion call.

    When fallback_message is set no completion should be attempted and the
    message is returned to the user as-is.
    """

    text: str = Field(default="", description="Context block sent to the model")
    sources: list[Source] = Field(default_factory=list, description="Cited documents, first-seen order")
    chunk_count: int = Field(default=0, description="Chunks that made it into the context")
    fallback_message: str | None = Field(default=None, description="Fixed reply that replaces the completion")
