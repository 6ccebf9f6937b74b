"""
Document domain model.

Describes a document exposed by the document source.

Dependencies: pydantic
System role: Corpus document descriptor
"""

from pydantic import BaseModel, Field


class DocumentInfo(BaseModel):
    """Document listed by the document source."""

    id: str = Field(description="Source-specific document identifier")
    name: str = Field(description="Display name used in citations")
    mime_type: str = Field(description="Content type reported by the source")
