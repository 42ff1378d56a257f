"""
Chat message CRUD operations.

Dependencies: sqlalchemy, chat_backend.boundary.db.models
System role: Message and attachment persistence operations
"""

from typing import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from chat_backend.boundary.db.CRUD.base_crud import BaseCRUD
from chat_backend.boundary.db.models.chat_attachment_model import ChatAttachmentModel
from chat_backend.boundary.db.models.chat_message_model import ChatMessageModel


class ChatMessageCRUD(BaseCRUD[ChatMessageModel]):
    """CRUD operations for ChatMessageModel."""

    def __init__(self) -> None:
        super().__init__(ChatMessageModel)

    async def create_with_attachments(
        self,
        session: AsyncSession,
        session_id: UUID,
        role: str,
        content: str,
        attachments: Iterable[dict] = (),
    ) -> ChatMessageModel:
        """
        Add a message and its attachment rows in one flush.

        Args:
            session: Async database session
            session_id: Owning chat session
            role: "user" or "assistant"
            content: Message text
            attachments: Dicts with file_name, content_type, file_path, file_size

        Returns:
            The flushed ChatMessageModel with attachments populated
        """
        message = ChatMessageModel(
            session_id=session_id,
            role=role,
            content=content,
            attachments=[ChatAttachmentModel(**attachment) for attachment in attachments],
        )
        session.add(message)
        await session.flush()
        return message


chat_message_crud = ChatMessageCRUD()
