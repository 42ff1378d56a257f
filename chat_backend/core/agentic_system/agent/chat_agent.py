"""
Chat agent construction and streaming.

Builds a tool-calling agent per turn with LangChain v1 create_agent and
streams only the assistant's text. Tool calls and tool results are
resolved inside the agent loop and never reach the caller.

Dependencies: langchain.agents, langchain_google_genai, langchain_core.messages
System role: Model invocation for the orchestration engine
"""

import logging
from collections.abc import AsyncGenerator
from typing import Any, Callable, Sequence

from langchain.agents import create_agent
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.tools import BaseTool
from langchain_google_genai import ChatGoogleGenerativeAI

from chat_backend.configs.llm import LLMSettings
from chat_backend.core.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)

# Given the tools for one call, return a runnable agent exposing astream()
AgentFactory = Callable[[Sequence[BaseTool]], Any]


class ChatAgentFactory:
    """
    Creates a fresh agent for each turn around a shared chat model.

    The model client is stateless per call; only the tool list differs
    between turns, so credentialed tools never outlive their request.
    """

    def __init__(self, model_id: str = "gemini-2.5-flash", temperature: float = 0.2, model=None) -> None:
        """
        Args:
            model_id: Gemini model identifier
            temperature: Sampling temperature
            model: Pre-built chat model (overrides model_id/temperature)
        """
        self._model_id = model_id
        self._model = model or ChatGoogleGenerativeAI(
            model=model_id,
            temperature=temperature,
        )

    @classmethod
    def from_settings(cls, settings: LLMSettings) -> "ChatAgentFactory":
        return cls(model_id=settings.model_id, temperature=settings.temperature)

    def __call__(self, tools: Sequence[BaseTool]):
        logger.info(
            f"{__name__}:create - Building agent (model={self._model_id}, tools={len(tools)})"
        )
        try:
            return create_agent(model=self._model, tools=list(tools))
        except Exception as e:
            raise UpstreamUnavailableError(
                f"Chat model unavailable: {e}",
                upstream=self._model_id,
            ) from e


def extract_text(content: Any) -> str:
    """
    Flatten message content to plain text.

    Handles both string content and the list-of-parts content Gemini
    returns; non-text parts (thinking, tool calls) are skipped.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, dict) and item.get("type", "text") == "text":
                parts.append(item.get("text", ""))
        return "".join(parts)
    return str(content) if content else ""


async def stream_agent_text(agent, messages: list[BaseMessage]) -> AsyncGenerator[str, None]:
    """
    Stream assistant text from an agent run.

    Args:
        agent: Runnable built by an AgentFactory
        messages: Full conversation for this turn

    Yields:
        str: Non-empty text fragments in model order
    """
    async for chunk, _metadata in agent.astream({"messages": messages}, stream_mode="messages"):
        # AIMessageChunk subclasses AIMessage; tool messages are skipped
        if not isinstance(chunk, AIMessage):
            continue
        text = extract_text(chunk.content)
        if text:
            yield text
