"""
Dependency injection container.

Factory functions for FastAPI dependencies. Process-scoped services
(HTTP client, knowledge service, tool registry, chat service) live in
the ServiceCache, built lazily and warmed by the application lifespan.

Dependencies: chat_backend.configs, chat_backend.application, chat_backend.boundary
System role: DI container for service injection
"""

import logging

import httpx
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from chat_backend.application.services import ChatService, KnowledgeService, SessionService
from chat_backend.boundary.db import get_async_db
from chat_backend.configs import Settings, get_settings

logger = logging.getLogger(__name__)

ANONYMOUS_USER = "anonymous"


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._http_client = None
        self._knowledge_service = None
        self._tool_registry = None
        self._chat_service = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Get the shared async HTTP client used by every tool."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.settings.tools.http_timeout_seconds,
                headers={"User-Agent": "chat-backend/0.1"},
            )
        return self._http_client

    @property
    def knowledge_service(self) -> KnowledgeService:
        """Get cached knowledge service."""
        if self._knowledge_service is None:
            from chat_backend.boundary.vdb.vector_store_factory import (
                get_embedding_client,
                get_vector_collection,
            )

            config = self.settings.vector_store
            self._knowledge_service = KnowledgeService(
                embedding_client=get_embedding_client(config),
                collection=get_vector_collection(config),
                vector_size=config.vector_size,
                default_threshold=config.default_threshold,
            )
        return self._knowledge_service

    @property
    def tool_registry(self):
        """Get cached tool registry."""
        if self._tool_registry is None:
            from chat_backend.core.agentic_system.tools import build_tool_registry

            self._tool_registry = build_tool_registry(
                self.settings.tools,
                self.http_client,
                knowledge_service=self.knowledge_service,
            )
        return self._tool_registry

    @property
    def chat_service(self) -> ChatService:
        """Get cached chat service."""
        if self._chat_service is None:
            # Lazy import to avoid loading the model client until first use
            from chat_backend.application.adapters import SqlAlchemySessionStore
            from chat_backend.boundary.db import get_async_session_factory
            from chat_backend.core.agentic_system.agent import ChatAgentFactory

            self._chat_service = ChatService(
                session_store=SqlAlchemySessionStore(get_async_session_factory()),
                tool_registry=self.tool_registry,
                agent_factory=ChatAgentFactory.from_settings(self.settings.llm),
            )
        return self._chat_service

    async def clear(self) -> None:
        """Close the HTTP client and drop all cached instances."""
        if self._http_client is not None:
            await self._http_client.aclose()
        self._http_client = None
        self._knowledge_service = None
        self._tool_registry = None
        self._chat_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """
    Identify the calling user from the X-User-Id header.

    Identity is not verified here; a missing header maps to "anonymous".
    """
    return x_user_id or ANONYMOUS_USER


def get_access_token(authorization: str | None = Header(default=None)) -> str | None:
    """
    Extract the caller's bearer credential, if any.

    Returns:
        str | None: Token without the "Bearer " prefix, None when absent
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_session_service(db: AsyncSession = Depends(get_async_db)) -> SessionService:
    """
    Get session service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        SessionService: Session service instance
    """
    return SessionService(db=db)


def get_chat_service() -> ChatService:
    """Get the process-scoped chat service."""
    return get_service_cache().chat_service


def get_knowledge_service() -> KnowledgeService:
    """Get the process-scoped knowledge service."""
    return get_service_cache().knowledge_service
