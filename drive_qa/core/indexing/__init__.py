"""Index building: orchestration and input screening."""

from drive_qa.core.indexing.content_filters import (
    PLACEHOLDER_PREFIXES,
    is_indexable_mime_type,
    is_placeholder_content,
)
from drive_qa.core.indexing.index_orchestrator import IndexOrchestrator

__all__ = [
    "IndexOrchestrator",
    "PLACEHOLDER_PREFIXES",
    "is_indexable_mime_type",
    "is_placeholder_content",
]
