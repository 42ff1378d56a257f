"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
Each concern (database, vector store, LLM, tools) lives in its own module
and is aggregated by Settings.
"""

from chat_backend.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
