"""Document storage backends."""

from drive_qa.boundary.storage.s3_document_source import S3DocumentSource

__all__ = ["S3DocumentSource"]
