"""
Chat message ORM model.

Dependencies: sqlalchemy, chat_backend.boundary.db.base
System role: Message persistence within a chat session
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chat_backend.boundary.db.base import Base, CreatedAtMixin, UUIDMixin

if TYPE_CHECKING:
    from chat_backend.boundary.db.models.chat_attachment_model import ChatAttachmentModel
    from chat_backend.boundary.db.models.chat_session_model import ChatSessionModel


class ChatMessageModel(Base, UUIDMixin, CreatedAtMixin):
    """
    One turn of a conversation.

    Attributes:
        session_id: Owning session (cascade delete)
        role: "user" or "assistant"
        content: Message text
        attachments: File metadata for this message (cascading delete)
    """

    __tablename__ = "chat_messages"

    session_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(50), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    session: Mapped["ChatSessionModel"] = relationship(back_populates="messages")
    attachments: Mapped[list["ChatAttachmentModel"]] = relationship(
        back_populates="message",
        cascade="all, delete-orphan",
        order_by="ChatAttachmentModel.created_at",
    )
