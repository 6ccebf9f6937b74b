"""
Paragraph-aware text chunker.

Splits extracted document text into bounded-size chunks on paragraph
boundaries, falling back to sentence boundaries for oversized paragraphs.

Dependencies: re (stdlib)
System role: First stage of the indexing pipeline (text -> chunks)
"""

import re

DEFAULT_MAX_CHUNK_LENGTH = 1000

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")

_PARAGRAPH_JOIN = "\n\n"
_SENTENCE_JOIN = " "


def chunk_text(text: str | None, max_length: int = DEFAULT_MAX_CHUNK_LENGTH) -> list[str]:
    """
    Split text into chunks of at most max_length characters.

    The bound is soft: a single sentence longer than max_length is
    emitted whole rather than truncated.

    Args:
        text: Raw extracted document text (None or empty yields [])
        max_length: Maximum chunk length in characters

    Returns:
        list[str]: Trimmed, non-empty chunks in source order

    Raises:
        ValueError: When max_length is not positive
    """
    if max_length < 1:
        raise ValueError("max_length must be positive")
    if not text or not text.strip():
        return []

    stripped = text.strip()
    if len(stripped) <= max_length:
        return [stripped]

    chunks: list[str] = []
    buffer = ""

    def append(unit: str, joiner: str) -> None:
        nonlocal buffer
        if not buffer:
            buffer = unit
        elif len(buffer) + len(joiner) + len(unit) > max_length:
            chunks.append(buffer)
            buffer = unit
        else:
            buffer = f"{buffer}{joiner}{unit}"

    for paragraph in _PARAGRAPH_BREAK.split(text):
        paragraph = paragraph.strip()
        if not paragraph:
            continue

        if len(paragraph) <= max_length:
            append(paragraph, _PARAGRAPH_JOIN)
            continue

        for sentence in _SENTENCE_BREAK.split(paragraph):
            sentence = sentence.strip()
            if sentence:
                append(sentence, _SENTENCE_JOIN)

    if buffer:
        chunks.append(buffer)

    return chunks


class TextChunker:
    """Stateless chunker bound to a maximum chunk length."""

    def __init__(self, max_length: int = DEFAULT_MAX_CHUNK_LENGTH) -> None:
        """
        Initialize chunker.

        Args:
            max_length: Maximum chunk length in characters
        """
        if max_length < 1:
            raise ValueError("max_length must be positive")
        self.max_length = max_length

    def chunk(self, text: str | None) -> list[str]:
        """Split text into chunks (see chunk_text)."""
        return chunk_text(text, self.max_length)
