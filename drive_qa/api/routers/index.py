"""
Index API endpoints.

Routes:
- POST /index/build - Start an index build in the background
- GET /index/status - Current build progress

Dependencies: drive_qa.core.indexing
System role: Index lifecycle HTTP API
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends
from pydantic import BaseModel, Field

from drive_qa.api.deps import get_index_orchestrator
from drive_qa.core.indexing.index_orchestrator import IndexOrchestrator
from drive_qa.models.chat import IndexBuildRequest
from drive_qa.models.index import IndexProgress

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/index", tags=["index"])


class IndexStatusResponse(BaseModel):
    """Index progress plus index metadata."""

    progress: IndexProgress
    indexed_chunks: int = Field(description="Chunk records currently in the index")
    is_building: bool
    index_age_seconds: float | None = Field(default=None, description="Seconds since the last build")


def _status(orchestrator: IndexOrchestrator) -> IndexStatusResponse:
    return IndexStatusResponse(
        progress=orchestrator.get_progress(),
        indexed_chunks=len(orchestrator.index),
        is_building=orchestrator.is_building,
        index_age_seconds=orchestrator.index_age_seconds,
    )


async def _run_build(orchestrator: IndexOrchestrator, force: bool) -> None:
    try:
        result = await orchestrator.build_index(force=force)
        logger.info(
            f"{__name__}:_run_build - Build finished: outcome={result.outcome.value}, "
            f"chunks={result.chunks_indexed}"
        )
    except Exception as e:
        logger.error(f"{__name__}:_run_build - Build failed: {type(e).__name__}: {e}")


@router.post("/build", response_model=IndexStatusResponse, status_code=202)
async def build_index(
    background_tasks: BackgroundTasks,
    request: IndexBuildRequest | None = None,
    orchestrator: IndexOrchestrator = Depends(get_index_orchestrator),
) -> IndexStatusResponse:
    """
    Start an index build.

    The build runs after the response is sent; poll GET /index/status for
    progress. A request made while a build is running is a no-op.

    Args:
        background_tasks: FastAPI background task queue
        request: Build options (force rebuild)
        orchestrator: Injected IndexOrchestrator

    Returns:
        IndexStatusResponse: Progress snapshot at request time
    """
    force = request.force if request else False
    if orchestrator.is_building:
        logger.info(f"{__name__}:build_index - Build already in progress")
    else:
        background_tasks.add_task(_run_build, orchestrator, force)
    return _status(orchestrator)


@router.get("/status", response_model=IndexStatusResponse)
async def index_status(
    orchestrator: IndexOrchestrator = Depends(get_index_orchestrator),
) -> IndexStatusResponse:
    """Return the current build progress."""
    return _status(orchestrator)
