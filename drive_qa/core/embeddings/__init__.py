"""Embedding generation (provider, cache, fixed-dimension backend)."""

from drive_qa.core.embeddings.embedding_provider import (
    EmbeddingProvider,
    EmbeddingResult,
    normalize_text,
)

__all__ = ["EmbeddingProvider", "EmbeddingResult", "normalize_text"]
