"""
Index lifecycle models.

Progress snapshots and build results for the vector index.

Dependencies: pydantic
System role: Index build status contracts
"""

from enum import Enum

from pydantic import BaseModel, Field


class IndexStatus(str, Enum):
    """Externally visible indexing status."""

    IDLE = "idle"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ERROR = "error"


class BuildOutcome(str, Enum):
    """What a build request did."""

    BUILT = "built"
    REUSED = "reused"
    ALREADY_RUNNING = "already-running"


class IndexProgress(BaseModel):
    """Indexing progress snapshot."""

    status: IndexStatus = IndexStatus.IDLE
    processed: int = Field(default=0, description="Documents handled so far")
    total: int = Field(default=0, description="Documents selected for this build")
    current_file: str = Field(default="", description="Document currently being indexed")


class IndexBuildResult(BaseModel):
    """Result of a build request."""

    outcome: BuildOutcome
    chunks_indexed: int = Field(default=0, description="Chunks in the index after the request")

    @property
    def already_running(self) -> bool:
        """True when the request was rejected because a build is in flight."""
        return self.outcome == BuildOutcome.ALREADY_RUNNING
