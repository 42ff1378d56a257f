"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from chat_backend.boundary.db.CRUD import chat_session_crud

    session = await chat_session_crud.get_with_history(db, session_id)
"""

from chat_backend.boundary.db.CRUD.base_crud import BaseCRUD
from chat_backend.boundary.db.CRUD.message_crud import ChatMessageCRUD, chat_message_crud
from chat_backend.boundary.db.CRUD.session_crud import ChatSessionCRUD, chat_session_crud

__all__ = [
    "BaseCRUD",
    "ChatSessionCRUD",
    "chat_session_crud",
    "ChatMessageCRUD",
    "chat_message_crud",
]
