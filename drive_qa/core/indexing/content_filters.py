"""
Content filters for indexing.

Recognizes documents that cannot be indexed: unsupported content types, and
placeholder strings the document source returns in place of text when
extraction is impossible.

Dependencies: None
System role: Indexing input screening
"""

# Markers produced by the document source instead of raising.
PLACEHOLDER_PREFIXES: tuple[str, ...] = (
    "[content unavailable",
    "[unsupported file type",
    "[google drive folder",
    "[folder has no content",
    "[error",
    "[image file",
    "[media file",
    "[file not downloadable",
    "spreadsheet content extraction not fully implemented",
)

_EXCLUDED_MIME_FRAGMENTS = (
    "image/",
    "audio/",
    "video/",
    "application/zip",
    "application/x-zip",
)

_INCLUDED_MIME_FRAGMENTS = (
    "pdf",
    "document",
    "spreadsheet",
    "msword",
    "ms-excel",
    "json",
    "xml",
    "csv",
)


def is_placeholder_content(text: str | None) -> bool:
    """
    True when text is a placeholder/error marker rather than document content.

    Args:
        text: Extracted text or marker

    Returns:
        bool: Whether the text starts with a known marker (case-insensitive)
    """
    if not text:
        return False
    return text.strip().lower().startswith(PLACEHOLDER_PREFIXES)


def is_indexable_mime_type(mime_type: str | None) -> bool:
    """
    True when text can plausibly be extracted from this content type.

    Images, audio, video and archives are rejected. Text, PDF, word-processor,
    spreadsheet, structured text and Google-native types are accepted.

    Args:
        mime_type: Content type reported by the document source

    Returns:
        bool: Whether the document should be offered to the indexer
    """
    if not mime_type:
        return False
    mime = mime_type.lower()
    if any(fragment in mime for fragment in _EXCLUDED_MIME_FRAGMENTS):
        return False
    if mime.startswith("text/") or mime.startswith("application/vnd.google-apps"):
        return True
    return any(fragment in mime for fragment in _INCLUDED_MIME_FRAGMENTS)
