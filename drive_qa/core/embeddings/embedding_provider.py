"""
Embedding provider with normalization, caching and zero-vector fallback.

Turns text into fixed-length vectors. Text is normalized before lookup so
that case and whitespace variants share one cache entry. Upstream calls go
through the shared retry policy; when every attempt fails the caller gets a
zero vector instead of an exception.

Dependencies: langchain_core.embeddings, pydantic, drive_qa.core.retry
System role: Embedding generation for indexing and query time
"""

import logging
import math

from langchain_core.embeddings import Embeddings
from pydantic import BaseModel, Field

from drive_qa.core.exceptions import EmbeddingError
from drive_qa.core.retry import retry_with_backoff

logger = logging.getLogger(__name__)

DEFAULT_MAX_EMBEDDING_CHARS = 8000


class EmbeddingResult(BaseModel):
    """Embedding vector tagged with the reason it was degraded, if any."""

    vector: list[float] = Field(description="Embedding vector (all zeros when degraded)")
    degraded_reason: str | None = Field(
        default=None,
        description="Why the zero-vector fallback was used; None for real embeddings",
    )
    cached: bool = Field(default=False, description="Served from the embedding cache")

    @property
    def is_degraded(self) -> bool:
        """True when the vector is the zero fallback."""
        return self.degraded_reason is not None


def normalize_text(text: str, max_chars: int = DEFAULT_MAX_EMBEDDING_CHARS) -> str:
    """
    Normalize text into an embedding cache key.

    Collapses whitespace runs, trims, lower-cases and truncates.
    normalize_text(normalize_text(s)) == normalize_text(s).

    Args:
        text: Source text
        max_chars: Maximum key length in characters

    Returns:
        str: Normalized text
    """
    collapsed = " ".join(text.split()).lower()
    return collapsed[:max_chars].rstrip()


class EmbeddingProvider:
    """
    Embedding provider with an in-process cache.

    Never raises to callers: invalid input and exhausted retries both
    produce a zero vector of the configured dimension.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        dimension: int = 1024,
        max_chars: int = DEFAULT_MAX_EMBEDDING_CHARS,
        retry_max_attempts: int = 3,
        retry_initial_delay: float = 0.1,
    ) -> None:
        """
        Initialize embedding provider.

        Args:
            embeddings: LangChain embeddings backend
            dimension: Expected vector dimension
            max_chars: Truncation bound applied during normalization
            retry_max_attempts: Attempts per upstream call
            retry_initial_delay: First backoff delay in seconds
        """
        self._embeddings = embeddings
        self.dimension = dimension
        self._max_chars = max_chars
        self._retry_max_attempts = retry_max_attempts
        self._retry_initial_delay = retry_initial_delay
        self._cache: dict[str, list[float]] = {}

    @property
    def cache_size(self) -> int:
        """Number of cached embeddings."""
        return len(self._cache)

    def clear_cache(self) -> None:
        """Drop all cached embeddings."""
        self._cache.clear()
        logger.info(f"{__name__}:clear_cache - Embedding cache cleared")

    def zero_vector(self) -> list[float]:
        """Return the fallback vector."""
        return [0.0] * self.dimension

    def _degraded(self, reason: str) -> EmbeddingResult:
        return EmbeddingResult(vector=self.zero_vector(), degraded_reason=reason)

    def _validate(self, vector: list[float]) -> list[float]:
        if len(vector) != self.dimension:
            raise EmbeddingError(
                "Embedding has unexpected dimension",
                {"expected": self.dimension, "actual": len(vector)},
            )
        values = [float(v) for v in vector]
        if not all(math.isfinite(v) for v in values):
            raise EmbeddingError("Embedding contains non-finite values")
        return values

    async def embed_with_status(self, text: str) -> EmbeddingResult:
        """
        Embed text and report whether the fallback was used.

        Args:
            text: Text to embed

        Returns:
            EmbeddingResult: Vector plus degradation reason (None on success)
        """
        if not isinstance(text, str) or not text.strip():
            logger.warning(f"{__name__}:embed_with_status - Invalid input, returning zero vector")
            return self._degraded("invalid input")

        key = normalize_text(text, self._max_chars)
        cached = self._cache.get(key)
        if cached is not None:
            return EmbeddingResult(vector=cached, cached=True)

        try:
            raw = await retry_with_backoff(
                lambda: self._embeddings.aembed_query(key),
                max_attempts=self._retry_max_attempts,
                initial_delay=self._retry_initial_delay,
            )
            vector = self._validate(list(raw))
        except Exception as e:
            logger.error(
                f"{__name__}:embed_with_status - Embedding failed, using zero vector: "
                f"{type(e).__name__}: {e}"
            )
            return self._degraded(f"{type(e).__name__}: {e}")

        self._cache[key] = vector
        return EmbeddingResult(vector=vector)

    async def embed(self, text: str) -> list[float]:
        """
        Embed text.

        Args:
            text: Text to embed

        Returns:
            list[float]: Embedding, or a zero vector on invalid input or failure
        """
        result = await self.embed_with_status(text)
        return result.vector
