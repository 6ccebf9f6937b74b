"""Grounded answer generation."""

from drive_qa.core.answering.answer_generator import (
    AnswerGenerator,
    build_context,
    format_answer_with_sources,
)
from drive_qa.core.answering.answer_prompt import (
    APOLOGY_MESSAGE,
    EMPTY_QUESTION_MESSAGE,
    NO_DOCUMENTS_MESSAGE,
    NO_RELEVANT_MESSAGE,
    NO_USABLE_CONTENT_MESSAGE,
)

__all__ = [
    "APOLOGY_MESSAGE",
    "AnswerGenerator",
    "EMPTY_QUESTION_MESSAGE",
    "NO_DOCUMENTS_MESSAGE",
    "NO_RELEVANT_MESSAGE",
    "NO_USABLE_CONTENT_MESSAGE",
    "build_context",
    "format_answer_with_sources",
]
