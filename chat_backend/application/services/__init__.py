"""Service orchestrators."""

from .chat_service import ChatService, TurnState
from .knowledge_service import KnowledgeService
from .session_service import SessionService

__all__ = [
    "ChatService",
    "KnowledgeService",
    "SessionService",
    "TurnState",
]
