"""
Semantic search over the vector index.

Embeds a query and ranks index records by cosine similarity, optionally
restricted to a subset of documents (focused search).

Dependencies: drive_qa.boundary.vdb, drive_qa.core.embeddings
System role: RAG retrieval business logic
"""

import logging
from collections.abc import Sequence

from drive_qa.boundary.vdb.vector_index import VectorIndex
from drive_qa.core.embeddings.embedding_provider import EmbeddingProvider
from drive_qa.models.chunk import ScoredChunk

logger = logging.getLogger(__name__)


class Retriever:
    """Retrieval business logic."""

    def __init__(
        self,
        index: VectorIndex,
        embedding_provider: EmbeddingProvider,
        default_top_k: int = 5,
        similarity_threshold: float = 0.3,
    ) -> None:
        """
        Initialize retriever.

        Args:
            index: Vector index to read
            embedding_provider: Provider used to embed queries
            default_top_k: Result count when search() is called without top_k
            similarity_threshold: Minimum score (exclusive) for a result
        """
        self._index = index
        self._embedding_provider = embedding_provider
        self.default_top_k = default_top_k
        self.similarity_threshold = similarity_threshold

    async def search(
        self,
        query: str,
        top_k: int | None = None,
        document_ids: Sequence[str] | None = None,
    ) -> list[ScoredChunk]:
        """
        Retrieve the chunks most similar to a query.

        Args:
            query: Natural-language query
            top_k: Maximum number of results (defaults to default_top_k)
            document_ids: Restrict search to these documents when non-empty

        Returns:
            list[ScoredChunk]: Results by descending score, all above the threshold
        """
        if self._index.is_empty:
            logger.info(f"{__name__}:search - Index is empty, returning no results")
            return []

        k = top_k if top_k is not None else self.default_top_k
        query_embedding = await self._embedding_provider.embed(query)

        results = self._index.search(
            query_embedding,
            top_k=k,
            similarity_threshold=self.similarity_threshold,
            document_ids=document_ids,
        )
        logger.info(
            f"{__name__}:search - Query matched {len(results)} chunks "
            f"(top_k={k}, filtered={bool(document_ids)})"
        )
        return results
