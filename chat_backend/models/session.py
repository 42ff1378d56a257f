"""
Session domain models and schemas.

Request/response schemas for session operations.

Dependencies: pydantic
System role: Session API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from chat_backend.models.chat import ChatMessageResponse


class CreateSessionRequest(BaseModel):
    """Request schema for creating a new session."""

    title: str = Field(default="New chat", min_length=1, max_length=500)


class UpdateSessionRequest(BaseModel):
    """Request schema for renaming a session."""

    title: str = Field(min_length=1, max_length=500)


class SessionResponse(BaseModel):
    """Response schema for session operations."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    created_at: datetime
    updated_at: datetime


class SessionDetailResponse(SessionResponse):
    """Session with its ordered message history."""

    messages: list[ChatMessageResponse] = Field(default_factory=list)
