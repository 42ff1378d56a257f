"""
LLM configuration settings.

Chat model selection for the streaming agent.

Dependencies: pydantic, pydantic_settings
System role: Model configuration for the orchestration engine
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from chat_backend.configs.base import BaseSettings


class LLMSettings(BaseSettings):
    """Chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    model_id: str = Field(
        default="gemini-2.5-flash",
        description="Google Generative AI chat model identifier",
    )
    temperature: float = Field(default=0.2, description="Sampling temperature")
