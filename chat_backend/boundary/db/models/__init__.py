"""
Database models package.

Exports:
  - ChatSessionModel: Conversation owned by a user
  - ChatMessageModel: Single user or assistant turn within a session
  - ChatAttachmentModel: File metadata attached to a message

Dependencies: sqlalchemy, chat_backend.boundary.db.base
System role: Database model definitions for chat persistence
"""

from chat_backend.boundary.db.models.chat_attachment_model import ChatAttachmentModel
from chat_backend.boundary.db.models.chat_message_model import ChatMessageModel
from chat_backend.boundary.db.models.chat_session_model import ChatSessionModel

__all__ = [
    "ChatSessionModel",
    "ChatMessageModel",
    "ChatAttachmentModel",
]
