"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_access_token,
    get_chat_service,
    get_knowledge_service,
    get_service_cache,
    get_session_service,
    get_settings_dependency,
    get_user_id,
)

__all__ = [
    "ServiceCache",
    "get_access_token",
    "get_chat_service",
    "get_knowledge_service",
    "get_service_cache",
    "get_session_service",
    "get_settings_dependency",
    "get_user_id",
]
