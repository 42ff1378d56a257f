"""
Tool registry.

Holds the process-scoped base tools and composes a new, immutable ToolSet
for each chat turn. Credentialed tools exist only inside the ToolSet of
the request that supplied the credential; the registry itself is never
mutated after construction.

Dependencies: httpx, langchain_core.tools, chat_backend.configs.tools
System role: Per-request tool wiring for the orchestration engine
"""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

import httpx
from langchain_core.tools import BaseTool

from chat_backend.configs.tools import ToolSettings
from chat_backend.core.agentic_system.tools.graph_tools import create_graph_tools

logger = logging.getLogger(__name__)

GraphToolFactory = Callable[[httpx.AsyncClient, str, str], list[BaseTool]]


@dataclass(frozen=True)
class ToolSet:
    """
    Tools exposed to the model for one call.

    Attributes:
        tools: Tools in the order they are offered to the model
        authenticated: True when credentialed tools are included
    """

    tools: tuple[BaseTool, ...] = ()
    authenticated: bool = False

    @property
    def names(self) -> list[str]:
        return [t.name for t in self.tools]

    @property
    def groups(self) -> frozenset[str]:
        """Capability groups present ("knowledge", "weather", "documentation", "graph")."""
        return frozenset(tag for t in self.tools for tag in (t.tags or []))

    def with_tools(self, extra: Sequence[BaseTool], authenticated: bool = False) -> "ToolSet":
        """Return a new ToolSet with extra tools appended; self is left untouched."""
        return ToolSet(
            tools=self.tools + tuple(extra),
            authenticated=self.authenticated or authenticated,
        )


class ToolRegistry:
    """Builds request-scoped ToolSets from a fixed base set."""

    def __init__(
        self,
        base_tools: Sequence[BaseTool],
        http_client: httpx.AsyncClient,
        settings: ToolSettings,
        graph_tool_factory: GraphToolFactory = create_graph_tools,
    ) -> None:
        """
        Args:
            base_tools: Credential-free tools shared by every turn
            http_client: Client handed to credentialed tool factories
            settings: Tool configuration (graph enable flag and base URL)
            graph_tool_factory: Builds credentialed tools for a bearer token
        """
        self._base = ToolSet(tools=tuple(base_tools))
        self._http_client = http_client
        self._settings = settings
        self._graph_tool_factory = graph_tool_factory

    @property
    def base_tool_set(self) -> ToolSet:
        return self._base

    def build_tool_set(self, access_token: str | None = None) -> ToolSet:
        """
        Compose the tools for one call.

        Args:
            access_token: Caller's bearer credential, if signed in

        Returns:
            ToolSet: The base set, plus freshly built Graph tools when a
            credential is supplied and Graph is enabled
        """
        if not access_token or not self._settings.enable_graph:
            return self._base

        graph_tools = self._graph_tool_factory(
            self._http_client,
            access_token,
            self._settings.graph_base_url,
        )
        tool_set = self._base.with_tools(graph_tools, authenticated=True)
        logger.info(
            f"{__name__}:build_tool_set - Attached {len(graph_tools)} credentialed tools",
            extra={"tool_count": len(tool_set.tools)},
        )
        return tool_set


def build_tool_registry(
    settings: ToolSettings,
    http_client: httpx.AsyncClient,
    knowledge_service=None,
) -> ToolRegistry:
    """
    Assemble the registry from the enabled tool groups.

    Args:
        settings: Tool configuration
        http_client: Shared async HTTP client
        knowledge_service: KnowledgeService for the search tool (skipped when None)
    """
    from chat_backend.core.agentic_system.tools.documentation_tools import (
        create_documentation_tools,
    )
    from chat_backend.core.agentic_system.tools.knowledge_tool import create_knowledge_tool
    from chat_backend.core.agentic_system.tools.weather_tools import create_weather_tools

    base_tools: list[BaseTool] = []
    if settings.enable_knowledge and knowledge_service is not None:
        base_tools.append(create_knowledge_tool(knowledge_service))
    if settings.enable_weather:
        base_tools.extend(create_weather_tools(http_client, settings))
    if settings.enable_documentation:
        base_tools.extend(create_documentation_tools(http_client, settings.documentation_server_url))

    logger.info(
        f"{__name__}:build_tool_registry - Base tools: {[t.name for t in base_tools]}"
    )
    return ToolRegistry(base_tools, http_client, settings)
