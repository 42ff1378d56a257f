"""
Chat service for streaming tool-augmented conversations.

Orchestrates one chat turn: history load, request-scoped tool wiring,
agent streaming and assistant message persistence. Failures are
reported in-band as a single ERROR fragment; the generator never
raises ordinary exceptions to its consumer.

Dependencies: chat_backend.application.adapters, chat_backend.core.agentic_system
System role: Chat orchestration engine
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import aclosing
from enum import Enum
from uuid import UUID

from chat_backend.application.adapters.session_store import SessionStore
from chat_backend.core.agentic_system.agent.chat_agent import AgentFactory, stream_agent_text
from chat_backend.core.agentic_system.agent.chat_prompt import build_conversation
from chat_backend.core.agentic_system.tools.tool_registry import ToolRegistry, ToolSet
from chat_backend.core.exceptions import ChatBackendException
from chat_backend.models.chat import MessageRole
from chat_backend.models.streaming import StreamFragment
from chat_backend.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


def _error_text(error: Exception) -> str:
    if isinstance(error, ChatBackendException):
        return error.message
    return str(error) or type(error).__name__


class TurnState(str, Enum):
    """Lifecycle of a single chat turn."""

    LOADING_HISTORY = "loading_history"
    TERMINAL_NOT_FOUND = "terminal_not_found"
    HISTORY_READY = "history_ready"
    CONFIGURING_TOOLS = "configuring_tools"
    STREAMING = "streaming"
    COMPLETING = "completing"
    TERMINAL_OK = "terminal_ok"
    TERMINAL_FAILED = "terminal_failed"


class ChatService:
    """
    Streaming chat orchestrator.

    Holds only process-scoped collaborators; everything specific to a
    turn (history snapshot, tool set, agent, accumulated text) lives in
    the stream_response generator frame, so concurrent turns share nothing
    mutable.
    """

    def __init__(
        self,
        session_store: SessionStore,
        tool_registry: ToolRegistry,
        agent_factory: AgentFactory,
    ) -> None:
        """
        Initialize chat service.

        Args:
            session_store: Loads history and persists messages
            tool_registry: Builds the per-turn ToolSet
            agent_factory: Creates a streaming agent for a given tool list
        """
        self.session_store = session_store
        self.tool_registry = tool_registry
        self.agent_factory = agent_factory

    def _transition(self, session_id: UUID, state: TurnState) -> None:
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:stream_response - {state.value}",
            session_id=session_id,
            turn_state=state.value,
        )

    def _configure_tools(self, session_id: UUID, access_token: str | None) -> ToolSet:
        """Build the turn's tools; degrade to the base set if credentialed wiring fails."""
        try:
            return self.tool_registry.build_tool_set(access_token)
        except Exception as e:
            logger.warning(
                f"{__name__}:stream_response - Failed to configure credentialed tools, "
                f"proceeding with base tools: {type(e).__name__}: {e}",
                extra={"session_id": str(session_id)},
            )
            return self.tool_registry.base_tool_set

    async def stream_response(
        self,
        session_id: UUID,
        user_message: str,
        cancel_event: asyncio.Event | None = None,
        access_token: str | None = None,
        user_message_id: UUID | None = None,
    ) -> AsyncGenerator[StreamFragment, None]:
        """
        Stream the assistant's reply to a user message.

        Flow:
        1. Load the session with its full history
        2. Wire tools for this call (credentialed tools only with a token)
        3. Build the conversation and stream text from the agent
        4. Persist the complete reply as one assistant message

        Args:
            session_id: Session UUID
            user_message: Text of the new user message
            cancel_event: Set by the caller to stop the turn early
            access_token: Caller's bearer credential for Graph tools
            user_message_id: Id of the user message if the caller already stored it

        Yields:
            StreamFragment: TEXT fragments in model order, or a single ERROR fragment

        Notes:
            Nothing is persisted when the turn fails, is cancelled or produces
            no text. A persistence failure after streaming is logged, not retried.
        """
        logger.info(
            f"{__name__}:stream_response - START session_id={session_id}, message_len={len(user_message)}"
        )

        # Step 1: Load session with history
        self._transition(session_id, TurnState.LOADING_HISTORY)
        try:
            snapshot = await self.session_store.load_session_with_history(session_id)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:stream_response - History load failed",
                e,
                session_id=session_id,
            )
            self._transition(session_id, TurnState.TERMINAL_FAILED)
            yield StreamFragment.error_fragment("Unable to load chat history")
            return

        if snapshot is None:
            self._transition(session_id, TurnState.TERMINAL_NOT_FOUND)
            yield StreamFragment.error_fragment("Chat session not found")
            return
        self._transition(session_id, TurnState.HISTORY_READY)

        # Step 2: Request-scoped tool wiring
        self._transition(session_id, TurnState.CONFIGURING_TOOLS)
        tool_set = self._configure_tools(session_id, access_token)
        logger.info(
            f"{__name__}:stream_response - Tools: {tool_set.names}",
            extra={"session_id": str(session_id), "authenticated": tool_set.authenticated},
        )

        # Step 3: Build conversation and agent
        messages = build_conversation(
            snapshot,
            user_message,
            tool_set,
            exclude_message_id=user_message_id,
        )
        try:
            agent = self.agent_factory(tool_set.tools)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:stream_response - Agent construction failed",
                e,
                session_id=session_id,
            )
            self._transition(session_id, TurnState.TERMINAL_FAILED)
            yield StreamFragment.error_fragment(_error_text(e))
            return

        # Step 4: Stream text fragments
        self._transition(session_id, TurnState.STREAMING)
        parts: list[str] = []
        cancelled = False
        try:
            async with aclosing(stream_agent_text(agent, messages)) as fragments:
                async for text in fragments:
                    if cancel_event is not None and cancel_event.is_set():
                        cancelled = True
                        break
                    parts.append(text)
                    yield StreamFragment.text_fragment(text)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:stream_response - Model stream failed",
                e,
                session_id=session_id,
                fragments=len(parts),
            )
            self._transition(session_id, TurnState.TERMINAL_FAILED)
            yield StreamFragment.error_fragment(_error_text(e))
            return

        if cancelled:
            logger.info(
                f"{__name__}:stream_response - Cancelled after {len(parts)} fragments, nothing stored",
                extra={"session_id": str(session_id)},
            )
            self._transition(session_id, TurnState.TERMINAL_FAILED)
            return

        # Step 5: Persist complete reply
        self._transition(session_id, TurnState.COMPLETING)
        full_answer = "".join(parts)
        if not full_answer:
            logger.warning(
                f"{__name__}:stream_response - Empty response, nothing stored",
                extra={"session_id": str(session_id)},
            )
            self._transition(session_id, TurnState.TERMINAL_OK)
            return

        try:
            await self.session_store.append_message(
                session_id,
                MessageRole.ASSISTANT,
                full_answer,
            )
        except Exception:
            logger.exception(
                f"{__name__}:stream_response - Failed to store assistant message",
                extra={"session_id": str(session_id), "answer_len": len(full_answer)},
            )

        self._transition(session_id, TurnState.TERMINAL_OK)
        logger.info(
            f"{__name__}:stream_response - END session_id={session_id}, answer_len={len(full_answer)}"
        )
