"""
Session service orchestrator.

Coordinates chat session lifecycle operations (create, list, rename,
delete) and persistence of the user's side of a turn. Sessions are
owned by the calling user id; another user's session is reported as
not found.

Dependencies: chat_backend.boundary.db.CRUD, chat_backend.models
System role: Session use case orchestration
"""

import logging
from typing import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from chat_backend.boundary.db.CRUD.message_crud import chat_message_crud
from chat_backend.boundary.db.CRUD.session_crud import chat_session_crud
from chat_backend.boundary.db.models.chat_session_model import ChatSessionModel
from chat_backend.core.exceptions import SessionNotFoundError, ValidationError
from chat_backend.models.chat import AttachmentInput, MessageRole, MessageSnapshot
from chat_backend.models.session import SessionDetailResponse, SessionResponse

logger = logging.getLogger(__name__)


class SessionService:
    """Session service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize session service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_owned(
        self,
        session_id: UUID,
        user_id: str,
        with_history: bool = False,
    ) -> ChatSessionModel:
        if with_history:
            session = await chat_session_crud.get_with_history(self.db, session_id)
        else:
            session = await chat_session_crud.get_by_id(self.db, session_id)

        if session is None or session.user_id != user_id:
            raise SessionNotFoundError(str(session_id))
        return session

    async def create_session(self, user_id: str, title: str = "New chat") -> SessionResponse:
        """
        Create a new, empty session for a user.

        Args:
            user_id: Owning user identifier
            title: Display title

        Returns:
            SessionResponse: Created session
        """
        if not user_id:
            raise ValidationError("user_id is required", field="user_id")

        session = await chat_session_crud.create(self.db, user_id=user_id, title=title)
        response = SessionResponse.model_validate(session)
        await self.db.commit()

        logger.info(
            f"{__name__}:create_session - Created session",
            extra={"session_id": str(response.id), "user_id": user_id},
        )
        return response

    async def list_sessions(
        self,
        user_id: str,
        limit: int = 50,
        offset: int = 0,
    ) -> list[SessionResponse]:
        """List a user's sessions, most recently active first."""
        sessions = await chat_session_crud.get_by_user(
            self.db,
            user_id,
            limit=limit,
            offset=offset,
        )
        return [SessionResponse.model_validate(s) for s in sessions]

    async def get_session(self, session_id: UUID, user_id: str) -> SessionDetailResponse:
        """
        Get a session with its full message history.

        Raises:
            SessionNotFoundError: If the session does not exist or belongs to another user
        """
        session = await self._get_owned(session_id, user_id, with_history=True)
        return SessionDetailResponse.model_validate(session)

    async def update_title(self, session_id: UUID, user_id: str, title: str) -> SessionResponse:
        """
        Rename a session.

        Raises:
            SessionNotFoundError: If the session does not exist or belongs to another user
        """
        session = await self._get_owned(session_id, user_id)
        session.title = title
        await self.db.flush()
        response = SessionResponse.model_validate(session)
        await self.db.commit()
        return response

    async def delete_session(self, session_id: UUID, user_id: str) -> None:
        """
        Delete a session with all of its messages and attachments.

        Children are eagerly loaded so the ORM cascade removes them in the
        same transaction.

        Raises:
            SessionNotFoundError: If the session does not exist or belongs to another user
        """
        session = await self._get_owned(session_id, user_id, with_history=True)
        message_count = len(session.messages)
        await self.db.delete(session)
        await self.db.commit()

        logger.info(
            f"{__name__}:delete_session - Deleted session with {message_count} messages",
            extra={"session_id": str(session_id)},
        )

    async def save_user_message(
        self,
        session_id: UUID,
        user_id: str,
        content: str,
        attachments: Iterable[AttachmentInput] = (),
    ) -> MessageSnapshot:
        """
        Persist the user's message (with attachment metadata) before a turn streams.

        Args:
            session_id: Target session
            user_id: Caller, must own the session
            content: Message text
            attachments: Attachment metadata supplied with the message

        Returns:
            MessageSnapshot: Stored message; its id is passed to the chat turn
            so it is not repeated in the model's history

        Raises:
            SessionNotFoundError: If the session does not exist or belongs to another user
        """
        if not content or not content.strip():
            raise ValidationError("Message content must not be empty", field="content")

        await self._get_owned(session_id, user_id)
        message = await chat_message_crud.create_with_attachments(
            self.db,
            session_id=session_id,
            role=MessageRole.USER.value,
            content=content,
            attachments=[a.model_dump() for a in attachments],
        )
        await chat_session_crud.touch(self.db, session_id)
        snapshot = MessageSnapshot.model_validate(message)
        await self.db.commit()

        logger.info(
            f"{__name__}:save_user_message - Stored user message",
            extra={"session_id": str(session_id), "message_id": str(snapshot.id)},
        )
        return snapshot
