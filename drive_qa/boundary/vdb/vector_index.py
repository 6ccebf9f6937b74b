"""
In-memory vector index.

Holds chunk records for the lifetime of the process and scores them with a
brute-force cosine similarity scan. Also owns the build state token that
serializes index builds.

Dependencies: numpy, drive_qa.models.chunk
System role: Vector store for RAG retrieval (process-local)
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from enum import Enum

import numpy as np

from drive_qa.core.exceptions import VectorIndexError
from drive_qa.models.chunk import ChunkRecord, ScoredChunk

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two vectors.

    Defined as 0.0 when either vector has zero norm.

    Args:
        a: First vector
        b: Second vector

    Returns:
        float: Similarity in [-1.0, 1.0]

    Raises:
        ValueError: When the vectors differ in length
    """
    if len(a) != len(b):
        raise ValueError(f"Vectors must have the same length ({len(a)} != {len(b)})")

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(va, vb) / (norm_a * norm_b))


class IndexState(str, Enum):
    """Build lifecycle state."""

    IDLE = "idle"
    BUILDING = "building"


class VectorIndex:
    """
    Ordered, in-memory collection of chunk records.

    Records are appended during a build and never mutated. A rebuild
    clears the collection first, so readers see either the previous
    generation or the partially repopulated one.
    """

    def __init__(self) -> None:
        """Initialize an empty index."""
        self._records: list[ChunkRecord] = []
        self._dimension: int | None = None
        self._state = IndexState.IDLE
        self.last_index_time: datetime | None = None

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[ChunkRecord, ...]:
        """Snapshot of the records in insertion order."""
        return tuple(self._records)

    @property
    def is_empty(self) -> bool:
        return not self._records

    @property
    def dimension(self) -> int | None:
        """Embedding dimension of the current generation (None when empty)."""
        return self._dimension

    @property
    def state(self) -> IndexState:
        return self._state

    @property
    def is_building(self) -> bool:
        return self._state == IndexState.BUILDING

    def age_seconds(self, now: datetime | None = None) -> float | None:
        """Seconds since the last completed build, or None if never built."""
        if self.last_index_time is None:
            return None
        now = now or datetime.now(timezone.utc)
        return (now - self.last_index_time).total_seconds()

    def try_begin_build(self) -> bool:
        """
        Move IDLE -> BUILDING.

        The check and the transition happen without yielding to the event
        loop, so two coroutines cannot both acquire the build.

        Returns:
            bool: False when a build is already in progress
        """
        if self._state == IndexState.BUILDING:
            return False
        self._state = IndexState.BUILDING
        return True

    def end_build(self) -> None:
        """Move BUILDING -> IDLE and stamp the generation time."""
        self._state = IndexState.IDLE
        self.last_index_time = datetime.now(timezone.utc)

    def clear(self) -> None:
        """Drop every record."""
        self._records = []
        self._dimension = None
        logger.info(f"{__name__}:clear - Vector index cleared")

    def add(self, record: ChunkRecord) -> None:
        """
        Append a record.

        Args:
            record: Chunk record to append

        Raises:
            VectorIndexError: When the embedding dimension differs from the
                dimension of records already in this generation
        """
        dim = len(record.embedding)
        if dim == 0:
            raise VectorIndexError("Cannot index an empty embedding", operation="add")
        if self._dimension is None:
            self._dimension = dim
        elif dim != self._dimension:
            raise VectorIndexError(
                "Embedding dimension mismatch",
                operation="add",
                details={"expected": self._dimension, "actual": dim},
            )
        self._records.append(record)

    def score(
        self,
        query_embedding: Sequence[float],
        document_ids: Sequence[str] | None = None,
    ) -> list[ScoredChunk]:
        """
        Score candidate records against a query, in insertion order.

        Args:
            query_embedding: Query vector
            document_ids: Restrict candidates to these documents when non-empty

        Returns:
            list[ScoredChunk]: One entry per candidate, unsorted

        Raises:
            VectorIndexError: When the query dimension does not match the index
        """
        candidates = self._records
        if document_ids:
            wanted = set(document_ids)
            candidates = [r for r in candidates if r.document_id in wanted]
        if not candidates:
            return []

        if len(query_embedding) != self._dimension:
            raise VectorIndexError(
                "Query dimension mismatch",
                operation="search",
                details={"expected": self._dimension, "actual": len(query_embedding)},
            )

        matrix = np.asarray([r.embedding for r in candidates], dtype=np.float64)
        query = np.asarray(query_embedding, dtype=np.float64)

        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        dots = matrix @ query
        scores = np.divide(dots, norms, out=np.zeros_like(dots), where=norms != 0.0)

        return [
            ScoredChunk(record=record, score=float(score))
            for record, score in zip(candidates, scores)
        ]

    def search(
        self,
        query_embedding: Sequence[float],
        top_k: int = 5,
        similarity_threshold: float = 0.3,
        document_ids: Sequence[str] | None = None,
    ) -> list[ScoredChunk]:
        """
        Rank records by similarity to a query embedding.

        Args:
            query_embedding: Query vector
            top_k: Maximum number of results
            similarity_threshold: Results scoring at or below this are dropped
            document_ids: Restrict candidates to these documents when non-empty

        Returns:
            list[ScoredChunk]: Results sorted by descending score; ties keep
                insertion order
        """
        if top_k < 1 or self.is_empty:
            return []

        scored = self.score(query_embedding, document_ids)
        # sorted() is stable with reverse=True, so equal scores keep index order
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)
        relevant = [s for s in ranked if s.score > similarity_threshold]
        return relevant[:top_k]
