"""
Chat session ORM model.

Represents a conversation owned by a user. Messages are loaded in
creation order and removed together with the session.

Dependencies: sqlalchemy, chat_backend.boundary.db.base
System role: Session persistence for chat context management
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chat_backend.boundary.db.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from chat_backend.boundary.db.models.chat_message_model import ChatMessageModel


class ChatSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Chat session ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Opaque identifier of the owning user
        title: Display title
        messages: Messages ordered by created_at (cascading delete)
        created_at: Session creation timestamp (UTC)
        updated_at: Bumped on title change and on every appended message
    """

    __tablename__ = "chat_sessions"

    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, default="New chat")

    messages: Mapped[list["ChatMessageModel"]] = relationship(
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="ChatMessageModel.created_at",
    )
