"""
Exception hierarchy for Drive QA application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DriveQAException(Exception):
    """Base exception for all Drive QA application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(DriveQAException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConversationNotFoundError(DriveQAException):
    """Raised when a conversation id is not known to the store."""

    def __init__(self, conversation_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize conversation not found error.

        Args:
            conversation_id: ID of the missing conversation
            details: Additional context
        """
        details = details or {}
        details["conversation_id"] = conversation_id
        self.conversation_id = conversation_id
        super().__init__(f"Conversation {conversation_id} not found", details)


class DocumentSourceError(DriveQAException):
    """Raised when the document source cannot be listed or read."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document source error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class EmbeddingError(DriveQAException):
    """Raised when the embedding backend returns an unusable vector."""

    pass


class VectorIndexError(DriveQAException):
    """Raised when vector index operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector index error.

        Args:
            message: Error message
            operation: Operation that failed (add, search)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class CompletionError(DriveQAException):
    """Raised when the completion backend returns no usable answer."""

    pass
