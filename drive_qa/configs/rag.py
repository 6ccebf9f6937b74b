"""
Retrieval configuration settings.

Chunking, embedding, index lifecycle, search and retry parameters for the
in-memory RAG engine.

Dependencies: pydantic, pydantic_settings
System role: RAG engine configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RagSettings(BaseSettings):
    """Retrieval-augmented generation engine configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking
    chunk_max_chars: int = Field(default=1000, ge=1, description="Soft upper bound on chunk length")
    min_chunk_chars: int = Field(default=10, ge=0, description="Chunks shorter than this are not embedded")

    # Embeddings
    embedding_max_chars: int = Field(
        default=8000,
        ge=1,
        description="Normalized text is truncated to this many characters before embedding",
    )
    embedding_dimension: int = Field(
        default=1024,
        ge=1,
        description="Embedding vector dimension (also the size of the zero-vector fallback)",
    )

    # Search
    search_top_k: int = Field(default=5, ge=1, description="Default number of search results")
    answer_top_k: int = Field(default=4, ge=1, description="Chunks retrieved when answering")
    similarity_threshold: float = Field(
        default=0.3,
        ge=-1.0,
        le=1.0,
        description="Results scoring at or below this cosine similarity are discarded",
    )

    # Indexing
    index_ttl_seconds: int = Field(
        default=3600,
        ge=0,
        description="A non-forced build reuses an index younger than this",
    )
    max_documents: int = Field(default=100, ge=1, description="Maximum documents per build")
    min_content_chars: int = Field(
        default=20,
        ge=0,
        description="Documents with less extracted text are skipped",
    )

    # Answering
    history_window: int = Field(
        default=10,
        ge=0,
        description="Number of recent conversation turns sent with a question",
    )

    # Retry policy shared by embedding and completion calls
    retry_max_attempts: int = Field(default=3, ge=1, description="Attempts before giving up")
    retry_initial_delay: float = Field(
        default=0.1,
        ge=0.0,
        description="First backoff delay in seconds, doubled on each retry",
    )
