"""
Chat agent system prompt.

Builds the system prompt from the tool groups wired for the current
call and assembles the full message list for one turn.

Dependencies: langchain_core.prompts, langchain_core.messages
System role: Prompt and conversation assembly for the chat agent
"""

from uuid import UUID

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from chat_backend.core.agentic_system.tools.tool_registry import ToolSet
from chat_backend.models.chat import MessageRole, SessionSnapshot

BASE_PROMPT = """You are a helpful AI assistant. You can help with various tasks including:
- Answering questions from the conversation so far
- Discussing files the user has attached (their names are listed with the message)"""

KNOWLEDGE_SECTION = """- Searching the internal knowledge base for stored documents"""

DOCUMENTATION_SECTION = """- Accessing Microsoft Learn documentation, learning paths and code samples"""

GRAPH_SECTION = """- Making authenticated calls to Microsoft Graph for the signed-in user (profile, groups, mail, calendar, files, contacts)"""

WEATHER_SECTION = """- Getting weather forecasts and conditions for any location worldwide (via Open-Meteo)

## Weather capabilities
- Current weather conditions
- Multi-day weather forecasts
- Hourly weather data
- Historical weather data
- Marine weather for coastal areas
- Weather for cities worldwide (just ask for weather in 'City Name')"""

CLOSING = """When using tools, explain what you're doing and provide helpful context about the information you find."""

CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "{system_prompt}"),
    MessagesPlaceholder("history"),
    ("human", "{question}"),
])


def build_system_prompt(tool_set: ToolSet) -> str:
    """
    Describe only the capabilities actually wired for this call.

    Args:
        tool_set: Tools offered to the model on this turn

    Returns:
        str: System prompt text
    """
    groups = tool_set.groups
    capability_lines = [BASE_PROMPT]
    if "knowledge" in groups:
        capability_lines.append(KNOWLEDGE_SECTION)
    if "documentation" in groups:
        capability_lines.append(DOCUMENTATION_SECTION)
    if "graph" in groups:
        capability_lines.append(GRAPH_SECTION)
    # Weather goes last because it carries its own sub-list
    if "weather" in groups:
        capability_lines.append(WEATHER_SECTION)

    return "\n".join(capability_lines) + "\n\n" + CLOSING


def _with_attachment_names(content: str, file_names: list[str]) -> str:
    if not file_names:
        return content
    return f"{content}\n\n[Attached files: {', '.join(file_names)}]"


def build_history(
    snapshot: SessionSnapshot,
    exclude_message_id: UUID | None = None,
) -> list[BaseMessage]:
    """
    Map stored messages to LangChain messages in created_at order.

    Args:
        snapshot: Session loaded at the start of the turn
        exclude_message_id: Message to leave out (the turn's own user message)
    """
    history: list[BaseMessage] = []
    for message in sorted(snapshot.messages, key=lambda m: m.created_at):
        if exclude_message_id is not None and message.id == exclude_message_id:
            continue
        if message.role == MessageRole.USER:
            history.append(HumanMessage(
                content=_with_attachment_names(
                    message.content,
                    [a.file_name for a in message.attachments],
                )
            ))
        else:
            history.append(AIMessage(content=message.content))
    return history


def build_conversation(
    snapshot: SessionSnapshot,
    user_message: str,
    tool_set: ToolSet,
    exclude_message_id: UUID | None = None,
) -> list[BaseMessage]:
    """
    Assemble system prompt, prior history and the new user message.

    Args:
        snapshot: Session loaded at the start of the turn
        user_message: Text of the new user message
        tool_set: Tools wired for this call (drives the system prompt)
        exclude_message_id: Already-persisted id of the new user message, if any

    Returns:
        list[BaseMessage]: SystemMessage, prior messages, then the new HumanMessage
    """
    current = next(
        (m for m in snapshot.messages if exclude_message_id is not None and m.id == exclude_message_id),
        None,
    )
    attachment_names = [a.file_name for a in current.attachments] if current else []

    return CHAT_PROMPT.invoke({
        "system_prompt": build_system_prompt(tool_set),
        "history": build_history(snapshot, exclude_message_id),
        "question": _with_attachment_names(user_message, attachment_names),
    }).to_messages()
