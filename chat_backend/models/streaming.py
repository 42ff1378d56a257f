"""
Streaming schemas.

StreamFragment is what the orchestration engine yields; StreamEvent is
the server-sent event payload the chat endpoint writes for each fragment.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

import json
import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

ERROR_PREFIX = "Error: "


class FragmentType(str, Enum):
    """Kind of fragment produced by a chat turn."""

    TEXT = "text"
    ERROR = "error"


class StreamFragment(BaseModel):
    """
    Tagged unit of a streamed reply.

    Attributes:
        type: TEXT for model output, ERROR for a terminal failure
        text: Fragment text; error fragments start with "Error: "
    """

    model_config = ConfigDict(frozen=True)

    type: FragmentType
    text: str

    @classmethod
    def text_fragment(cls, text: str) -> "StreamFragment":
        return cls(type=FragmentType.TEXT, text=text)

    @classmethod
    def error_fragment(cls, reason: str) -> "StreamFragment":
        return cls(type=FragmentType.ERROR, text=f"{ERROR_PREFIX}{reason}")

    @property
    def is_error(self) -> bool:
        return self.type == FragmentType.ERROR


class StreamEventType(str, Enum):
    """Server-to-client event types for streaming chat."""

    MESSAGE = "message"
    CHUNK = "chunk"
    COMPLETE = "complete"
    ERROR = "error"


class StreamEvent(BaseModel):
    """
    Server-sent event payload.

    Attributes:
        type: Event type identifier
        content: Text carried by the event (chunk text, empty otherwise)
        message_id: Persisted user message the stream answers
        error: Error text for ERROR events
    """

    type: StreamEventType
    content: str = ""
    message_id: uuid.UUID | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_sse(self) -> str:
        """Render as a single `data:` frame."""
        return f"data: {json.dumps(self.to_dict())}\n\n"
