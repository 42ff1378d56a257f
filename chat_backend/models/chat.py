"""
Chat domain models and schemas.

Immutable history snapshots handed to the orchestration engine, plus
request/response schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts and engine inputs
"""

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Author of a stored message."""

    USER = "user"
    ASSISTANT = "assistant"


class AttachmentSnapshot(BaseModel):
    """Read-only view of an attachment row."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: uuid.UUID
    file_name: str
    content_type: str
    file_path: str
    file_size: int
    created_at: datetime


class MessageSnapshot(BaseModel):
    """Read-only view of a message row and its attachments."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: uuid.UUID
    role: MessageRole
    content: str
    created_at: datetime
    attachments: tuple[AttachmentSnapshot, ...] = ()


class SessionSnapshot(BaseModel):
    """
    Session with its full history, as loaded at the start of a turn.

    Frozen: later writes to the store are never visible through a
    snapshot already handed out.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: uuid.UUID
    user_id: str
    title: str
    created_at: datetime
    updated_at: datetime
    messages: tuple[MessageSnapshot, ...] = ()


class AttachmentInput(BaseModel):
    """Attachment metadata supplied with a user message."""

    file_name: str = Field(max_length=255)
    content_type: str = Field(default="application/octet-stream", max_length=100)
    file_path: str = Field(max_length=1000)
    file_size: int = Field(default=0, ge=0)


class SendMessageRequest(BaseModel):
    """Request schema for posting a user message and streaming the reply."""

    content: str = Field(min_length=1, description="User message text")
    attachments: list[AttachmentInput] = Field(default_factory=list)


class ChatAttachmentResponse(BaseModel):
    """Attachment as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    file_name: str
    content_type: str
    file_size: int
    created_at: datetime


class ChatMessageResponse(BaseModel):
    """Single chat message in history."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    role: MessageRole = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")
    created_at: datetime
    attachments: list[ChatAttachmentResponse] = Field(default_factory=list)
