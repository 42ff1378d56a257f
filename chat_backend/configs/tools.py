"""
Tool configuration settings.

Enable flags and upstream endpoints for the capabilities the chat
agent can call (knowledge base, weather, documentation, Microsoft Graph).

Dependencies: pydantic, pydantic_settings
System role: Tool wiring configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from chat_backend.configs.base import BaseSettings


class ToolSettings(BaseSettings):
    """External tool configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TOOLS_",
        case_sensitive=False,
        extra="ignore",
    )

    enable_knowledge: bool = Field(default=True, description="Wire the knowledge search tool")
    enable_weather: bool = Field(default=True, description="Wire the Open-Meteo weather tools")
    enable_documentation: bool = Field(
        default=True,
        description="Wire the Microsoft Learn documentation tools",
    )
    enable_graph: bool = Field(
        default=True,
        description="Wire Microsoft Graph tools when a bearer credential is supplied",
    )

    graph_base_url: str = Field(
        default="https://graph.microsoft.com/v1.0",
        description="Microsoft Graph REST base URL",
    )
    documentation_server_url: str = Field(
        default="https://learn.microsoft.com/api/mcp",
        description="Microsoft Learn documentation search endpoint",
    )
    weather_base_url: str = Field(
        default="https://api.open-meteo.com/v1",
        description="Open-Meteo forecast API base URL",
    )
    weather_archive_url: str = Field(
        default="https://archive-api.open-meteo.com/v1/archive",
        description="Open-Meteo historical archive endpoint",
    )
    weather_marine_url: str = Field(
        default="https://marine-api.open-meteo.com/v1/marine",
        description="Open-Meteo marine forecast endpoint",
    )
    weather_geocoding_url: str = Field(
        default="https://geocoding-api.open-meteo.com/v1/search",
        description="Open-Meteo geocoding endpoint",
    )

    http_timeout_seconds: float = Field(default=30.0, description="Outbound HTTP timeout")
