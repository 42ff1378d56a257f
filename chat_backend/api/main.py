"""
FastAPI application with assembled routers.

Initializes the FastAPI app, warms process-scoped services in the
lifespan and configures the uvicorn server.

Dependencies: fastapi, chat_backend.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_backend.api import api_router
from chat_backend.api.deps.dependencies import get_service_cache
from chat_backend.boundary.db.create_tables import create_all_tables
from chat_backend.configs import get_settings
from chat_backend.observability.logger import configure_logging
from chat_backend.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup: logging, tables, knowledge collection and the service cache.
    Collection (re)creation happens only here, never while serving.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"{__name__}:lifespan - Application startup ({settings.environment})")

    await create_all_tables()

    cache = get_service_cache()
    await cache.knowledge_service.initialize(recreate=settings.vector_store.recreate_on_init)
    # Trigger property access to load instances
    _ = cache.tool_registry
    _ = cache.chat_service
    logger.info(f"{__name__}:lifespan - Service cache pre-warmed")

    yield

    await cache.clear()
    logger.info(f"{__name__}:lifespan - Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Chat Backend API",
        description="Streaming tool-augmented chat with a vector knowledge base",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "chat_backend.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
