"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin, CreatedAtMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - ChatSessionModel, ChatMessageModel, ChatAttachmentModel: Chat entities
  - chat_session_crud, chat_message_crud: CRUD operation singletons

Dependencies: sqlalchemy, chat_backend.configs
System role: Relational store for chat sessions, messages and attachments
"""

from chat_backend.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from chat_backend.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from chat_backend.boundary.db.models import (
    ChatAttachmentModel,
    ChatMessageModel,
    ChatSessionModel,
)
from chat_backend.boundary.db.CRUD import (
    BaseCRUD,
    ChatMessageCRUD,
    ChatSessionCRUD,
    chat_message_crud,
    chat_session_crud,
)

__all__ = [
    # Base classes
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "ChatSessionModel",
    "ChatMessageModel",
    "ChatAttachmentModel",
    # CRUD
    "BaseCRUD",
    "ChatSessionCRUD",
    "ChatMessageCRUD",
    "chat_session_crud",
    "chat_message_crud",
]
