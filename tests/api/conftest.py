"""
API test fixtures.

Builds a FastAPI app from the routers (no lifespan) with the database,
chat and knowledge dependencies pointed at in-memory test doubles.
"""

import httpx
import pytest
from fastapi import FastAPI

from chat_backend.api import api_router
from chat_backend.api.deps import get_chat_service, get_knowledge_service
from chat_backend.application.services.chat_service import ChatService
from chat_backend.boundary.db import get_async_db
from chat_backend.configs.tools import ToolSettings
from chat_backend.core.agentic_system.tools.tool_registry import ToolRegistry


@pytest.fixture
def empty_tool_registry() -> ToolRegistry:
    """Registry with no tools, so turns never reach the network."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    return ToolRegistry([], http_client, ToolSettings())


@pytest.fixture
def chat_service(session_store, empty_tool_registry, agent_factory) -> ChatService:
    """ChatService over the test store with no tools wired."""
    return ChatService(session_store, empty_tool_registry, agent_factory)


@pytest.fixture
def app(session_factory, chat_service, knowledge_service) -> FastAPI:
    """Create FastAPI test application with every router under /api/v1."""
    app = FastAPI()
    app.include_router(api_router, prefix="/api/v1")

    async def override_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_db
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    app.dependency_overrides[get_knowledge_service] = lambda: knowledge_service
    return app


@pytest.fixture
async def client(app: FastAPI):
    """Async HTTP client bound to the app on the test event loop."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://testserver",
        headers={"X-User-Id": "user-1"},
    ) as client:
        yield client
