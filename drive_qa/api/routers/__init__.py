"""API routers."""

from drive_qa.api.routers.ai import router as ai_router
from drive_qa.api.routers.conversations import router as conversations_router
from drive_qa.api.routers.health import router as health_router
from drive_qa.api.routers.index import router as index_router

__all__ = [
    "ai_router",
    "conversations_router",
    "health_router",
    "index_router",
]
