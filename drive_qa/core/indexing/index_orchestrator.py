"""
Index build orchestration.

Walks the document source, extracts and chunks each document, embeds the
chunks and repopulates the vector index. Enforces single-flight builds and
a freshness TTL, and exposes progress for polling.

Flow:
1. Acquire the build state (reject if a build is running)
2. Clear the index and the embedding cache
3. List indexable documents (bounded by max_documents)
4. For each document: fetch text, skip placeholders, chunk, embed, append
5. Release the build state and stamp the generation time

Dependencies: drive_qa.core.chunker, drive_qa.core.embeddings,
              drive_qa.boundary.vdb, drive_qa.core.document_source
System role: Indexing pipeline driver
"""

import logging

from drive_qa.boundary.vdb.vector_index import VectorIndex
from drive_qa.core.chunker import TextChunker
from drive_qa.core.document_source import DocumentSource
from drive_qa.core.embeddings.embedding_provider import EmbeddingProvider
from drive_qa.core.indexing.content_filters import (
    is_indexable_mime_type,
    is_placeholder_content,
)
from drive_qa.models.chunk import ChunkRecord
from drive_qa.models.document import DocumentInfo
from drive_qa.models.index import (
    BuildOutcome,
    IndexBuildResult,
    IndexProgress,
    IndexStatus,
)
from drive_qa.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class IndexOrchestrator:
    """
    Drives (re)population of the vector index from the document source.

    Per-document and per-chunk failures are logged and skipped; they never
    abort the build.
    """

    def __init__(
        self,
        source: DocumentSource,
        index: VectorIndex,
        embedding_provider: EmbeddingProvider,
        chunker: TextChunker | None = None,
        max_documents: int = 100,
        index_ttl_seconds: float = 3600,
        min_content_chars: int = 20,
        min_chunk_chars: int = 10,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            source: Document source to enumerate and read
            index: Vector index to populate
            embedding_provider: Provider used to embed chunks
            chunker: Text chunker (default max length when None)
            max_documents: Maximum documents per build
            index_ttl_seconds: A non-forced build reuses an index younger than this
            min_content_chars: Documents with less text are skipped
            min_chunk_chars: Chunks with less text are not embedded
        """
        self._source = source
        self._index = index
        self._embedding_provider = embedding_provider
        self._chunker = chunker or TextChunker()
        self.max_documents = max_documents
        self.index_ttl_seconds = index_ttl_seconds
        self.min_content_chars = min_content_chars
        self.min_chunk_chars = min_chunk_chars
        self._progress = IndexProgress()

    @property
    def index(self) -> VectorIndex:
        return self._index

    @property
    def is_building(self) -> bool:
        return self._index.is_building

    @property
    def index_age_seconds(self) -> float | None:
        return self._index.age_seconds()

    def get_progress(self) -> IndexProgress:
        """Return a snapshot of the current progress."""
        return self._progress.model_copy()

    def clear(self) -> None:
        """Drop the index, the embedding cache and progress."""
        self._index.clear()
        self._embedding_provider.clear_cache()
        self._progress = IndexProgress()

    def _is_fresh(self) -> bool:
        age = self._index.age_seconds()
        return not self._index.is_empty and age is not None and age < self.index_ttl_seconds

    async def build_index(self, force: bool = False) -> IndexBuildResult:
        """
        Rebuild the vector index.

        Args:
            force: Rebuild even when the current index is within its TTL

        Returns:
            IndexBuildResult: BUILT with the chunk count, REUSED when the fresh
                index was kept, or ALREADY_RUNNING when another build holds the lock

        Raises:
            Exception: When the document listing itself fails (progress is set to ERROR)
        """
        if self._index.is_building:
            logger.info(f"{__name__}:build_index - Build already in progress, rejecting")
            return IndexBuildResult(outcome=BuildOutcome.ALREADY_RUNNING, chunks_indexed=len(self._index))

        if not force and self._is_fresh():
            logger.info(
                f"{__name__}:build_index - Index is fresh ({len(self._index)} chunks), skipping rebuild"
            )
            return IndexBuildResult(outcome=BuildOutcome.REUSED, chunks_indexed=len(self._index))

        if not self._index.try_begin_build():
            return IndexBuildResult(outcome=BuildOutcome.ALREADY_RUNNING, chunks_indexed=len(self._index))

        logger.info(f"{__name__}:build_index - START force={force}")
        try:
            self._index.clear()
            self._embedding_provider.clear_cache()
            self._progress = IndexProgress(status=IndexStatus.IN_PROGRESS)

            listed = await self._source.list_indexable_documents(self.max_documents)
            documents = [d for d in listed if is_indexable_mime_type(d.mime_type)]
            documents = documents[: self.max_documents]
            self._progress.total = len(documents)
            logger.info(
                f"{__name__}:build_index - Found {len(documents)} indexable documents "
                f"({len(listed)} listed)"
            )

            for document in documents:
                self._progress.current_file = document.name
                try:
                    added = await self._index_document(document)
                    logger.info(
                        f"{__name__}:build_index - Indexed {document.name} ({added} chunks)"
                    )
                except Exception as e:
                    log_exception_with_context(
                        logger,
                        f"{__name__}:build_index - Failed to index document",
                        e,
                        document_id=document.id,
                        document_name=document.name,
                    )
                self._progress.processed += 1

            self._progress.status = IndexStatus.COMPLETED
            self._progress.current_file = ""
            logger.info(
                f"{__name__}:build_index - END {len(self._index)} chunks from "
                f"{self._progress.processed} documents"
            )
            return IndexBuildResult(outcome=BuildOutcome.BUILT, chunks_indexed=len(self._index))

        except Exception as e:
            self._progress.status = IndexStatus.ERROR
            self._progress.current_file = ""
            log_exception_with_context(logger, f"{__name__}:build_index - Build failed", e)
            raise

        finally:
            self._index.end_build()

    async def _index_document(self, document: DocumentInfo) -> int:
        """
        Extract, chunk, embed and append one document.

        Args:
            document: Document to index

        Returns:
            int: Number of chunk records appended
        """
        text = await self._source.get_extracted_text(document.id, document.mime_type)

        if not text or len(text.strip()) < self.min_content_chars:
            logger.info(f"{__name__}:_index_document - Skipping {document.name}: no usable text")
            return 0
        if is_placeholder_content(text):
            log_with_context(
                logger,
                logging.INFO,
                f"{__name__}:_index_document - Skipping placeholder content",
                document_id=document.id,
                placeholder=text.strip()[:60],
            )
            return 0

        chunks = self._chunker.chunk(text)
        added = 0
        for chunk_index, chunk in enumerate(chunks):
            if len(chunk.strip()) < self.min_chunk_chars:
                continue
            try:
                result = await self._embedding_provider.embed_with_status(chunk)
                if result.is_degraded or not any(result.vector):
                    logger.warning(
                        f"{__name__}:_index_document - Dropping chunk {chunk_index} of "
                        f"{document.name}: {result.degraded_reason or 'zero embedding'}"
                    )
                    continue
                self._index.add(
                    ChunkRecord(
                        document_id=document.id,
                        document_name=document.name,
                        chunk_index=chunk_index,
                        text=chunk,
                        embedding=result.vector,
                        mime_type=document.mime_type,
                    )
                )
                added += 1
            except Exception as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:_index_document - Failed to index chunk",
                    e,
                    document_id=document.id,
                    chunk_index=chunk_index,
                )
        return added
