"""
Core business logic module.

Contains the chunker, embedding provider, retrieval, answering, indexing
and conversation components, plus the exception hierarchy.
"""

from drive_qa.core.exceptions import (
    CompletionError,
    ConversationNotFoundError,
    DocumentSourceError,
    DriveQAException,
    EmbeddingError,
    ValidationError,
    VectorIndexError,
)

__all__ = [
    "CompletionError",
    "ConversationNotFoundError",
    "DocumentSourceError",
    "DriveQAException",
    "EmbeddingError",
    "ValidationError",
    "VectorIndexError",
]
