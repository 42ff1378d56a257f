"""
Health check API endpoints.

Routes: GET /health, GET /health/db, GET /health/vector-store

Dependencies: chat_backend.boundary, chat_backend.api.deps
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from chat_backend.application.services import KnowledgeService
from chat_backend.api.deps import get_knowledge_service
from chat_backend.boundary.db import get_async_db

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(db: AsyncSession = Depends(get_async_db)) -> HealthResponse:
    """Database health check."""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"{__name__}:health_check_db - {type(e).__name__}: {e}")
        raise HTTPException(status_code=503, detail="Database unavailable")
    return HealthResponse(status="healthy", message="Database connection OK")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> HealthResponse:
    """Vector store health check."""
    try:
        exists = await knowledge_service.collection.collection_exists()
    except Exception as e:
        logger.error(f"{__name__}:health_check_vector_store - {type(e).__name__}: {e}")
        raise HTTPException(status_code=503, detail="Vector store unavailable")
    if not exists:
        raise HTTPException(status_code=503, detail="Knowledge collection missing")
    return HealthResponse(status="healthy", message="Vector store accessible")
