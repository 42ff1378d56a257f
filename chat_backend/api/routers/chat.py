"""Chat API endpoints.

Routes:
- POST /chat/sessions/{session_id}/messages - Store a user message and stream the reply (SSE)

Dependencies: chat_backend.application.services.chat_service, chat_backend.application.services.session_service
System role: Chat messaging HTTP API with streaming support
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from chat_backend.application.services.chat_service import ChatService
from chat_backend.application.services.session_service import SessionService
from chat_backend.api.deps import (
    get_access_token,
    get_chat_service,
    get_session_service,
    get_user_id,
)
from chat_backend.core.exceptions import SessionNotFoundError, ValidationError
from chat_backend.models.chat import SendMessageRequest
from chat_backend.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat/sessions", tags=["chat"])


@router.post("/{session_id}/messages")
async def send_message(
    session_id: UUID,
    body: SendMessageRequest,
    request: Request,
    user_id: str = Depends(get_user_id),
    access_token: str | None = Depends(get_access_token),
    session_service: SessionService = Depends(get_session_service),
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """Store the user's message, then stream the assistant reply as Server-Sent Events.

    SSE Format:
        data: {"type": "message", "message_id": "..."}

        data: {"type": "chunk", "content": "..."}

        data: {"type": "complete", "message_id": "..."}

        data: {"type": "error", "error": "Error: ..."}

    Args:
        session_id: Session UUID
        body: SendMessageRequest with content and attachment metadata
        request: Incoming request (polled for client disconnect)
        user_id: Caller identity from X-User-Id
        access_token: Bearer credential enabling Graph tools
        session_service: Injected SessionService
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: SSE stream of chat events

    Raises:
        HTTPException(404): Session not found (before streaming starts)
        HTTPException(400): Empty message
    """
    logger.info(f"{__name__}:send_message - START session_id={session_id}")

    try:
        user_message = await session_service.save_user_message(
            session_id,
            user_id,
            body.content,
            attachments=body.attachments,
        )
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    cancel_event = asyncio.Event()

    async def event_generator() -> AsyncGenerator[str, None]:
        """Generate SSE events from the chat turn."""
        yield StreamEvent(type=StreamEventType.MESSAGE, message_id=user_message.id).to_sse()

        failed = False
        async for fragment in chat_service.stream_response(
            session_id=session_id,
            user_message=body.content,
            cancel_event=cancel_event,
            access_token=access_token,
            user_message_id=user_message.id,
        ):
            if await request.is_disconnected():
                logger.info(f"{__name__}:send_message - Client disconnected session_id={session_id}")
                cancel_event.set()
                continue

            if fragment.is_error:
                failed = True
                yield StreamEvent(type=StreamEventType.ERROR, error=fragment.text).to_sse()
            else:
                yield StreamEvent(type=StreamEventType.CHUNK, content=fragment.text).to_sse()

        if not failed and not cancel_event.is_set():
            yield StreamEvent(type=StreamEventType.COMPLETE, message_id=user_message.id).to_sse()
        logger.info(f"{__name__}:send_message - Stream finished session_id={session_id}")

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )
