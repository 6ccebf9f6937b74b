"""
Chunk domain models.

A chunk record is the unit of retrieval: one embedded slice of a document.

Dependencies: pydantic
System role: Vector index record and search result structures
"""

from pydantic import BaseModel, ConfigDict, Field


class ChunkRecord(BaseModel):
    """Embedded document chunk held by the vector index."""

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(description="Source document identifier")
    document_name: str = Field(description="Source document display name")
    chunk_index: int = Field(ge=0, description="Position of the chunk within its document")
    text: str = Field(description="Chunk text content")
    embedding: list[float] = Field(description="Embedding vector")
    mime_type: str = Field(default="", description="Content type of the source document")


class ScoredChunk(BaseModel):
    """Chunk record paired with its similarity to a query."""

    record: ChunkRecord
    score: float = Field(description="Cosine similarity to the query (-1.0 to 1.0)")
