"""
Session API endpoints.

Routes:
- POST /chat/sessions - Create new session
- GET /chat/sessions - List the caller's sessions
- GET /chat/sessions/{id} - Get session with message history
- PUT /chat/sessions/{id} - Rename session
- DELETE /chat/sessions/{id} - Delete session, messages and attachments

Dependencies: chat_backend.application.services.session_service, chat_backend.models
System role: Session management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from chat_backend.application.services.session_service import SessionService
from chat_backend.api.deps import get_session_service, get_user_id
from chat_backend.core.exceptions import SessionNotFoundError, ValidationError
from chat_backend.models.session import (
    CreateSessionRequest,
    SessionDetailResponse,
    SessionResponse,
    UpdateSessionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(
    request: CreateSessionRequest,
    user_id: str = Depends(get_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Create new chat session.

    Raises:
        HTTPException(400): Invalid request
        HTTPException(500): Creation failed
    """
    try:
        return await session_service.create_session(user_id=user_id, title=request.title)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"{__name__}:create_session - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Session creation failed: {str(e)}")


@router.get("", response_model=list[SessionResponse])
async def list_sessions(
    limit: int = 50,
    offset: int = 0,
    user_id: str = Depends(get_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> list[SessionResponse]:
    """
    List the caller's sessions, most recently active first.

    Raises:
        HTTPException(500): Retrieval failed
    """
    try:
        return await session_service.list_sessions(user_id, limit=limit, offset=offset)
    except Exception as e:
        logger.error(f"{__name__}:list_sessions - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve sessions: {str(e)}")


@router.get("/{session_id}", response_model=SessionDetailResponse)
async def get_session(
    session_id: UUID,
    user_id: str = Depends(get_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> SessionDetailResponse:
    """
    Get a session with its ordered message history.

    Raises:
        HTTPException(404): Session not found
    """
    try:
        return await session_service.get_session(session_id, user_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"{__name__}:get_session - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve session: {str(e)}")


@router.put("/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: UUID,
    request: UpdateSessionRequest,
    user_id: str = Depends(get_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Rename a session.

    Raises:
        HTTPException(404): Session not found
    """
    try:
        return await session_service.update_title(session_id, user_id, request.title)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"{__name__}:update_session - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Session update failed: {str(e)}")


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: UUID,
    user_id: str = Depends(get_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> None:
    """
    Delete session by ID.

    Returns:
        204 No Content on success

    Raises:
        HTTPException(404): Session not found
        HTTPException(500): Deletion failed
    """
    try:
        await session_service.delete_session(session_id, user_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"{__name__}:delete_session - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Session deletion failed: {str(e)}")
