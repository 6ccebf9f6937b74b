"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    ai_router,
    conversations_router,
    health_router,
    index_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(index_router)
api_router.include_router(ai_router)
api_router.include_router(conversations_router)

__all__ = ["api_router"]
