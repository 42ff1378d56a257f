"""
Chat attachment ORM model.

File metadata only; file bytes live wherever file_path points.

Dependencies: sqlalchemy, chat_backend.boundary.db.base
System role: Attachment persistence for chat messages
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chat_backend.boundary.db.base import Base, CreatedAtMixin, UUIDMixin

if TYPE_CHECKING:
    from chat_backend.boundary.db.models.chat_message_model import ChatMessageModel


class ChatAttachmentModel(Base, UUIDMixin, CreatedAtMixin):
    """Attachment metadata, immutable after creation."""

    __tablename__ = "chat_attachments"

    message_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("chat_messages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)
    file_path: Mapped[str] = mapped_column(String(1000), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    message: Mapped["ChatMessageModel"] = relationship(back_populates="attachments")
