"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceContainer,
    get_chat_service,
    get_conversation_store,
    get_index_orchestrator,
    get_service_container,
    get_user_id,
)

__all__ = [
    "ServiceContainer",
    "get_chat_service",
    "get_conversation_store",
    "get_index_orchestrator",
    "get_service_container",
    "get_user_id",
]
