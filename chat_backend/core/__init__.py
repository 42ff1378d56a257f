"""
Core business logic module.

Contains the exception hierarchy and the agentic system (chat agent,
prompt assembly, tools and the per-request tool registry).
"""

from chat_backend.core.exceptions import (
    ChatBackendException,
    DimensionMismatchError,
    EmbeddingError,
    KnowledgeStoreError,
    PersistenceError,
    SessionNotFoundError,
    UpstreamUnavailableError,
    ValidationError,
    VectorStoreError,
)

__all__ = [
    "ChatBackendException",
    "DimensionMismatchError",
    "EmbeddingError",
    "KnowledgeStoreError",
    "PersistenceError",
    "SessionNotFoundError",
    "UpstreamUnavailableError",
    "ValidationError",
    "VectorStoreError",
]
