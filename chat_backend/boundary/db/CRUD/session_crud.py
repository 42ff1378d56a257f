"""
Chat session CRUD operations.

Extends BaseCRUD with history loading and per-user listing.

Dependencies: sqlalchemy, chat_backend.boundary.db.models
System role: Session persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from chat_backend.boundary.db.base import utc_now
from chat_backend.boundary.db.CRUD.base_crud import BaseCRUD
from chat_backend.boundary.db.models.chat_message_model import ChatMessageModel
from chat_backend.boundary.db.models.chat_session_model import ChatSessionModel


class ChatSessionCRUD(BaseCRUD[ChatSessionModel]):
    """CRUD operations for ChatSessionModel."""

    def __init__(self) -> None:
        super().__init__(ChatSessionModel)

    async def get_with_history(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> ChatSessionModel | None:
        """
        Retrieve a session with its messages and their attachments eagerly loaded.

        Args:
            session: Async database session
            id: Session UUID

        Returns:
            ChatSessionModel with messages loaded in created_at order, None if not found
        """
        stmt = (
            select(ChatSessionModel)
            .where(ChatSessionModel.id == id)
            .options(
                selectinload(ChatSessionModel.messages).selectinload(
                    ChatMessageModel.attachments
                )
            )
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user(
        self,
        session: AsyncSession,
        user_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ChatSessionModel]:
        """
        List a user's sessions, most recently active first.

        Args:
            session: Async database session
            user_id: Owner identifier
            limit: Maximum number of sessions to return
            offset: Number of sessions to skip
        """
        stmt = (
            select(ChatSessionModel)
            .where(ChatSessionModel.user_id == user_id)
            .order_by(ChatSessionModel.updated_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def touch(self, session: AsyncSession, id: UUID) -> bool:
        """
        Bump updated_at on a session.

        Returns:
            True if the session exists, False otherwise
        """
        stmt = (
            update(ChatSessionModel)
            .where(ChatSessionModel.id == id)
            .values(updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


chat_session_crud = ChatSessionCRUD()
