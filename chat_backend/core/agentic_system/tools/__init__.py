"""Tools the chat agent can call, and the registry that wires them per request."""

from chat_backend.core.agentic_system.tools.tool_registry import (
    ToolRegistry,
    ToolSet,
    build_tool_registry,
)

__all__ = ["ToolRegistry", "ToolSet", "build_tool_registry"]
