"""
Chat agent module.

Provides the per-turn tool-calling agent and conversation assembly.

Dependencies: langchain, langchain_google_genai
System role: Agent module exports
"""

from chat_backend.core.agentic_system.agent.chat_agent import (
    AgentFactory,
    ChatAgentFactory,
    extract_text,
    stream_agent_text,
)
from chat_backend.core.agentic_system.agent.chat_prompt import (
    build_conversation,
    build_system_prompt,
)

__all__ = [
    "AgentFactory",
    "ChatAgentFactory",
    "extract_text",
    "stream_agent_text",
    "build_conversation",
    "build_system_prompt",
]
