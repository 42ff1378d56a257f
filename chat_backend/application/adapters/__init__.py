"""Supporting adapters."""

from .session_store import SessionStore, SqlAlchemySessionStore

__all__ = ["SessionStore", "SqlAlchemySessionStore"]
