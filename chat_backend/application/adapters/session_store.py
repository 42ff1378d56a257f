"""
Session store adapter.

Bridges the orchestration engine to the relational store. Every call
opens its own AsyncSession from the factory, so concurrent turns never
share a unit of work. Loaded history is returned as frozen snapshots.

Dependencies: sqlalchemy, chat_backend.boundary.db.CRUD, chat_backend.models.chat
System role: Session Store contract used by ChatService
"""

import logging
from typing import Iterable, Protocol
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chat_backend.boundary.db.CRUD.message_crud import chat_message_crud
from chat_backend.boundary.db.CRUD.session_crud import chat_session_crud
from chat_backend.core.exceptions import PersistenceError, SessionNotFoundError
from chat_backend.models.chat import (
    AttachmentInput,
    MessageRole,
    MessageSnapshot,
    SessionSnapshot,
)

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Persistence operations the chat turn depends on."""

    async def load_session_with_history(self, session_id: UUID) -> SessionSnapshot | None:
        ...

    async def append_message(
        self,
        session_id: UUID,
        role: MessageRole,
        content: str,
        attachments: Iterable[AttachmentInput] = (),
    ) -> MessageSnapshot:
        ...

    async def update_session_timestamp(self, session_id: UUID) -> None:
        ...


class SqlAlchemySessionStore:
    """SessionStore backed by the SQLAlchemy chat models."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Args:
            session_factory: Factory producing independent AsyncSessions
        """
        self._session_factory = session_factory

    async def load_session_with_history(self, session_id: UUID) -> SessionSnapshot | None:
        """
        Load a session with every message and attachment.

        Returns:
            SessionSnapshot with messages in created_at order, or None if absent
        """
        async with self._session_factory() as db:
            session = await chat_session_crud.get_with_history(db, session_id)
            if session is None:
                return None
            snapshot = SessionSnapshot.model_validate(session)

        logger.info(
            f"{__name__}:load_session_with_history - Loaded {len(snapshot.messages)} messages",
            extra={"session_id": str(session_id)},
        )
        return snapshot

    async def append_message(
        self,
        session_id: UUID,
        role: MessageRole,
        content: str,
        attachments: Iterable[AttachmentInput] = (),
    ) -> MessageSnapshot:
        """
        Insert a message (and attachment metadata) and bump the session's updated_at.

        Raises:
            SessionNotFoundError: If the session no longer exists
            PersistenceError: If the write cannot be committed
        """
        async with self._session_factory() as db:
            try:
                if not await chat_session_crud.touch(db, session_id):
                    raise SessionNotFoundError(str(session_id))
                message = await chat_message_crud.create_with_attachments(
                    db,
                    session_id=session_id,
                    role=MessageRole(role).value,
                    content=content,
                    attachments=[a.model_dump() for a in attachments],
                )
                snapshot = MessageSnapshot.model_validate(message)
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                raise PersistenceError(
                    f"Failed to store {MessageRole(role).value} message",
                    session_id=str(session_id),
                    details={"error": str(e)},
                ) from e

        logger.info(
            f"{__name__}:append_message - Stored {snapshot.role.value} message",
            extra={"session_id": str(session_id), "message_id": str(snapshot.id)},
        )
        return snapshot

    async def update_session_timestamp(self, session_id: UUID) -> None:
        """
        Bump updated_at without adding a message.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        async with self._session_factory() as db:
            if not await chat_session_crud.touch(db, session_id):
                raise SessionNotFoundError(str(session_id))
            await db.commit()
