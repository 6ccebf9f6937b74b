"""
Health check API endpoints.

Routes: GET /health

Dependencies: drive_qa.api.deps
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from drive_qa.api.deps import get_index_orchestrator
from drive_qa.core.indexing.index_orchestrator import IndexOrchestrator


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    indexed_chunks: int


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(
    orchestrator: IndexOrchestrator = Depends(get_index_orchestrator),
) -> HealthResponse:
    """Basic health check."""
    return HealthResponse(
        status="healthy",
        message="Server Healthy",
        indexed_chunks=len(orchestrator.index),
    )
