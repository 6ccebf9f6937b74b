"""Domain models and API schemas."""

from drive_qa.models.chat import Answer, ChatAnswer, Source
from drive_qa.models.chunk import ChunkRecord, ScoredChunk
from drive_qa.models.conversation import Conversation, ConversationMessage
from drive_qa.models.document import DocumentInfo
from drive_qa.models.index import BuildOutcome, IndexBuildResult, IndexProgress, IndexStatus
from drive_qa.models.streaming import StreamEvent, StreamEventType

__all__ = [
    "Answer",
    "BuildOutcome",
    "ChatAnswer",
    "ChunkRecord",
    "Conversation",
    "ConversationMessage",
    "DocumentInfo",
    "IndexBuildResult",
    "IndexProgress",
    "IndexStatus",
    "ScoredChunk",
    "Source",
    "StreamEvent",
    "StreamEventType",
]
