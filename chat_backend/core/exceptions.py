"""
Exception hierarchy for the chat backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ChatBackendException(Exception):
    """Base exception for all chat backend errors."""

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


class ValidationError(ChatBackendException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class SessionNotFoundError(ChatBackendException):
    """Raised when a chat session cannot be found."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Chat session not found: {session_id}", details)


class PersistenceError(ChatBackendException):
    """Raised when a message or session write cannot be committed."""

    def __init__(
        self,
        message: str,
        session_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if session_id:
            details["session_id"] = session_id
        super().__init__(message, details)


class UpstreamUnavailableError(ChatBackendException):
    """Raised when the model provider or a tool upstream cannot be reached."""

    def __init__(
        self,
        message: str,
        upstream: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream error.

        Args:
            message: Error message
            upstream: Name of the unavailable dependency (model, graph, ...)
            details: Additional context
        """
        details = details or {}
        if upstream:
            details["upstream"] = upstream
        super().__init__(message, details)


class KnowledgeStoreError(ChatBackendException):
    """Base exception for knowledge store errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class EmbeddingError(KnowledgeStoreError):
    """Raised when embedding generation fails or returns an empty vector."""

    pass


class DimensionMismatchError(KnowledgeStoreError):
    """Raised when a vector's length differs from the collection dimensionality."""

    def __init__(
        self,
        expected: int,
        actual: int,
        document_id: str | None = None,
    ) -> None:
        """
        Initialize dimension mismatch error.

        Args:
            expected: Dimensionality the collection was created with
            actual: Length of the offending vector
            document_id: Document being stored, if any
        """
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Embedding dimension mismatch: expected {expected}, got {actual}",
            document_id,
            {"expected": expected, "actual": actual},
        )


class VectorStoreError(ChatBackendException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
