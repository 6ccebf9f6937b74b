"""
Shared test fixtures and configuration for entire test suite.

Provides: embedding backend and chat model mocks, document source mocks,
in-memory index, provider and orchestrator wired together
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

from drive_qa.boundary.vdb.vector_index import VectorIndex
from drive_qa.core.chunker import TextChunker
from drive_qa.core.embeddings.embedding_provider import EmbeddingProvider
from drive_qa.core.indexing.index_orchestrator import IndexOrchestrator
from drive_qa.core.retriever import Retriever
from drive_qa.models.chunk import ChunkRecord
from drive_qa.models.document import DocumentInfo

TEST_EMBEDDING = [0.1, 0.2, 0.3]


def make_record(
    document_id: str = "doc-1",
    document_name: str = "notes.txt",
    chunk_index: int = 0,
    text: str = "Some indexed text.",
    embedding: list[float] | None = None,
) -> ChunkRecord:
    """Build a chunk record with test defaults."""
    return ChunkRecord(
        document_id=document_id,
        document_name=document_name,
        chunk_index=chunk_index,
        text=text,
        embedding=embedding if embedding is not None else list(TEST_EMBEDDING),
    )


@pytest.fixture
def mock_embeddings() -> MagicMock:
    """
    Create mock LangChain embeddings backend.

    Returns:
        MagicMock: Backend whose aembed_query returns a fixed 3-d vector
    """
    embeddings = MagicMock()
    embeddings.aembed_query = AsyncMock(return_value=list(TEST_EMBEDDING))
    return embeddings


@pytest.fixture
def embedding_provider(mock_embeddings: MagicMock) -> EmbeddingProvider:
    """Provide EmbeddingProvider over the mock backend with no retry delay."""
    return EmbeddingProvider(
        embeddings=mock_embeddings,
        dimension=3,
        retry_max_attempts=3,
        retry_initial_delay=0,
    )


@pytest.fixture
def vector_index() -> VectorIndex:
    """Provide an empty in-memory vector index."""
    return VectorIndex()


@pytest.fixture
def sample_document() -> DocumentInfo:
    """Provide a plain-text document descriptor."""
    return DocumentInfo(id="doc-1", name="rag-notes.txt", mime_type="text/plain")


@pytest.fixture
def mock_document_source(sample_document: DocumentInfo) -> MagicMock:
    """
    Create mock document source with one indexable document.

    Returns:
        MagicMock: Source with async list_indexable_documents / get_extracted_text
    """
    source = MagicMock()
    source.list_indexable_documents = AsyncMock(return_value=[sample_document])
    source.get_extracted_text = AsyncMock(return_value="Test content with information about RAG.")
    return source


@pytest.fixture
def orchestrator(
    mock_document_source: MagicMock,
    vector_index: VectorIndex,
    embedding_provider: EmbeddingProvider,
) -> IndexOrchestrator:
    """Provide IndexOrchestrator wired to the mock source."""
    return IndexOrchestrator(
        source=mock_document_source,
        index=vector_index,
        embedding_provider=embedding_provider,
        chunker=TextChunker(1000),
    )


@pytest.fixture
def retriever(vector_index: VectorIndex, embedding_provider: EmbeddingProvider) -> Retriever:
    """Provide Retriever over the shared index and provider."""
    return Retriever(index=vector_index, embedding_provider=embedding_provider)


@pytest.fixture
def mock_chat_model() -> MagicMock:
    """
    Create mock LangChain chat model.

    Returns:
        MagicMock: Model whose ainvoke returns "Mocked AI answer"
    """
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=AIMessage(content="Mocked AI answer"))
    return model


@pytest.fixture
def record_factory():
    """Provide the make_record factory."""
    return make_record
