"""
Document source contract.

The indexer depends only on this protocol; the S3 implementation lives in
the boundary layer.

Dependencies: drive_qa.models.document
System role: Corpus access interface
"""

from typing import Protocol, runtime_checkable

from drive_qa.models.document import DocumentInfo


@runtime_checkable
class DocumentSource(Protocol):
    """Read-only access to the user's documents."""

    async def list_indexable_documents(self, max_count: int) -> list[DocumentInfo]:
        """
        List documents whose content type can be indexed.

        Args:
            max_count: Maximum number of documents to return

        Returns:
            list[DocumentInfo]: Documents in enumeration order
        """
        ...

    async def get_extracted_text(self, document_id: str, mime_type: str) -> str:
        """
        Fetch a document's text.

        Returns a placeholder marker (see content_filters) instead of raising
        when the content cannot be extracted.

        Args:
            document_id: Document identifier
            mime_type: Content type of the document

        Returns:
            str: Extracted text or a placeholder marker
        """
        ...
