"""
Retrieval-augmented answer generation.

Retrieves the chunks most relevant to a question, assembles them into a
context block and asks the chat model for a grounded answer. Supports
conversation history and a document-id filter for focused questions.

Flow:
1. Reject blank questions
2. Build the index on first use (empty index)
3. Retrieve top chunks and assemble the context, skipping placeholders
4. Prompt the chat model (retried) with system text, history and context
5. Return the answer with deduplicated sources

Dependencies: langchain_core, drive_qa.core.retriever, drive_qa.core.indexing
System role: RAG answer orchestration
"""

import logging
from collections.abc import AsyncGenerator, Sequence
from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from drive_qa.core.answering.answer_prompt import (
    ANSWER_PROMPT,
    APOLOGY_MESSAGE,
    EMPTY_QUESTION_MESSAGE,
    NO_DOCUMENTS_MESSAGE,
    NO_RELEVANT_MESSAGE,
    NO_USABLE_CONTENT_MESSAGE,
)
from drive_qa.core.answering.answer_schema import AnswerContext
from drive_qa.core.exceptions import CompletionError
from drive_qa.core.indexing.content_filters import is_placeholder_content
from drive_qa.core.indexing.index_orchestrator import IndexOrchestrator
from drive_qa.core.retriever import Retriever
from drive_qa.core.retry import retry_with_backoff
from drive_qa.models.chat import Answer, Source
from drive_qa.models.chunk import ScoredChunk
from drive_qa.models.conversation import ConversationMessage
from drive_qa.models.streaming import StreamEvent, StreamEventType
from drive_qa.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n---\n\n"

_ROLE_TO_MESSAGE: dict[str, type[BaseMessage]] = {
    "user": HumanMessage,
    "assistant": AIMessage,
    "system": SystemMessage,
}


def _content_text(content: Any) -> str:
    """Flatten model message content, which may be a string or a list of parts."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content or "")


def build_context(results: Sequence[ScoredChunk]) -> AnswerContext:
    """
    Assemble retrieved chunks into a context block.

    Placeholder chunks are skipped. Sources are deduplicated by document id
    in first-seen order.

    Args:
        results: Retrieved chunks, best first

    Returns:
        AnswerContext: Context text, sources and chunk count
    """
    parts: list[str] = []
    sources: list[Source] = []
    seen: set[str] = set()

    for result in results:
        record = result.record
        if is_placeholder_content(record.text):
            continue
        parts.append(f"Document: {record.document_name}\n\n{record.text}")
        if record.document_id not in seen:
            seen.add(record.document_id)
            sources.append(Source(document_id=record.document_id, document_name=record.document_name))

    return AnswerContext(text=CONTEXT_SEPARATOR.join(parts), sources=sources, chunk_count=len(parts))


def format_answer_with_sources(answer: Answer) -> str:
    """
    Render an answer as plain text followed by its source list.

    Args:
        answer: Generated answer

    Returns:
        str: Answer text, plus a "Sources:" section when there are sources
    """
    if not answer.sources:
        return answer.answer
    lines = "\n".join(f"- {source.document_name}" for source in answer.sources)
    return f"{answer.answer}\n\nSources:\n{lines}"


class AnswerGenerator:
    """
    Grounded question answering over the vector index.

    answer() never raises: upstream failures are logged and turned into a
    fixed apology with no sources.
    """

    def __init__(
        self,
        orchestrator: IndexOrchestrator,
        retriever: Retriever,
        chat_model: BaseChatModel,
        answer_top_k: int = 4,
        history_window: int = 10,
        retry_max_attempts: int = 3,
        retry_initial_delay: float = 0.1,
    ) -> None:
        """
        Initialize answer generator.

        Args:
            orchestrator: Index orchestrator (builds the index on first use)
            retriever: Semantic search over the index
            chat_model: LangChain chat model used for completions
            answer_top_k: Chunks retrieved per question
            history_window: Most recent history messages sent to the model
            retry_max_attempts: Attempts for the completion call
            retry_initial_delay: First backoff delay in seconds
        """
        self._orchestrator = orchestrator
        self._retriever = retriever
        self._chat_model = chat_model
        self.answer_top_k = answer_top_k
        self.history_window = history_window
        self.retry_max_attempts = retry_max_attempts
        self.retry_initial_delay = retry_initial_delay

    def _history_messages(
        self, history: Sequence[ConversationMessage] | None
    ) -> list[BaseMessage]:
        if not history or self.history_window <= 0:
            return []
        recent = list(history)[-self.history_window:]
        return [_ROLE_TO_MESSAGE[msg.role](content=msg.content) for msg in recent]

    def build_messages(
        self,
        question: str,
        context: str,
        conversation_history: Sequence[ConversationMessage] | None = None,
    ) -> list[BaseMessage]:
        """
        Build the prompt messages for one completion.

        Args:
            question: User question
            context: Context block from build_context()
            conversation_history: Prior turns, oldest first

        Returns:
            list[BaseMessage]: System, history and final human message
        """
        return ANSWER_PROMPT.invoke({
            "context": context,
            "question": question,
            "chat_history": self._history_messages(conversation_history),
        }).to_messages()

    async def _prepare_context(
        self,
        question: str,
        document_ids: Sequence[str] | None,
    ) -> AnswerContext:
        index = self._orchestrator.index
        if index.is_empty:
            logger.info(f"{__name__}:_prepare_context - Index empty, building before answering")
            await self._orchestrator.build_index()
            if index.is_empty:
                return AnswerContext(fallback_message=NO_DOCUMENTS_MESSAGE)

        results = await self._retriever.search(
            question, top_k=self.answer_top_k, document_ids=document_ids
        )
        if not results:
            return AnswerContext(fallback_message=NO_RELEVANT_MESSAGE)

        context = build_context(results)
        if not context.text:
            return AnswerContext(fallback_message=NO_USABLE_CONTENT_MESSAGE)

        logger.info(
            f"{__name__}:_prepare_context - Context from {context.chunk_count} chunks, "
            f"{len(context.sources)} sources"
        )
        return context

    async def answer(
        self,
        question: str,
        conversation_history: Sequence[ConversationMessage] | None = None,
        document_ids: Sequence[str] | None = None,
    ) -> Answer:
        """
        Answer a question from the indexed documents.

        Args:
            question: User question
            conversation_history: Prior turns, oldest first
            document_ids: Restrict retrieval to these documents when non-empty

        Returns:
            Answer: Answer text with deduplicated sources
        """
        if not isinstance(question, str) or not question.strip():
            return Answer(answer=EMPTY_QUESTION_MESSAGE)

        logger.info(
            f"{__name__}:answer - START question_len={len(question)}, "
            f"history={len(conversation_history or [])}, focused={bool(document_ids)}"
        )
        try:
            context = await self._prepare_context(question, document_ids)
            if context.fallback_message is not None:
                logger.info(f"{__name__}:answer - Short-circuit: {context.fallback_message[:40]}")
                return Answer(answer=context.fallback_message)

            messages = self.build_messages(question, context.text, conversation_history)
            response = await retry_with_backoff(
                lambda: self._chat_model.ainvoke(messages),
                max_attempts=self.retry_max_attempts,
                initial_delay=self.retry_initial_delay,
            )
            text = _content_text(response.content).strip()
            if not text:
                raise CompletionError("Chat model returned an empty answer")

            logger.info(f"{__name__}:answer - END answer_len={len(text)}")
            return Answer(answer=text, sources=context.sources)

        except Exception as e:
            log_exception_with_context(logger, f"{__name__}:answer - Failed to answer question", e)
            return Answer(answer=APOLOGY_MESSAGE)

    async def astream(
        self,
        question: str,
        conversation_history: Sequence[ConversationMessage] | None = None,
        document_ids: Sequence[str] | None = None,
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream an answer as events.

        Yields a CONTEXT event with the sources, one TOKEN event per model
        chunk and a COMPLETE event with the full answer. Short-circuit cases
        yield a single COMPLETE event with the fixed reply; failures yield a
        single ERROR event with the apology.

        Args:
            question: User question
            conversation_history: Prior turns, oldest first
            document_ids: Restrict retrieval to these documents when non-empty

        Yields:
            StreamEvent: Context, token, complete or error events
        """
        if not isinstance(question, str) or not question.strip():
            yield StreamEvent(
                event=StreamEventType.COMPLETE,
                data={"full_answer": EMPTY_QUESTION_MESSAGE, "sources": []},
            )
            return

        logger.info(f"{__name__}:astream - START question_len={len(question)}")
        try:
            context = await self._prepare_context(question, document_ids)
            if context.fallback_message is not None:
                yield StreamEvent(
                    event=StreamEventType.COMPLETE,
                    data={"full_answer": context.fallback_message, "sources": []},
                )
                return

            sources = [source.model_dump() for source in context.sources]
            yield StreamEvent(event=StreamEventType.CONTEXT, data={"sources": sources})

            messages = self.build_messages(question, context.text, conversation_history)
            full_answer = ""
            token_index = 0
            async for chunk in self._chat_model.astream(messages):
                token = _content_text(chunk.content)
                if not token:
                    continue
                full_answer += token
                yield StreamEvent(
                    event=StreamEventType.TOKEN,
                    data={"token": token, "index": token_index},
                )
                token_index += 1

            logger.info(f"{__name__}:astream - END streamed {token_index} tokens")
            yield StreamEvent(
                event=StreamEventType.COMPLETE,
                data={"full_answer": full_answer.strip(), "sources": sources},
            )

        except Exception as e:
            log_exception_with_context(logger, f"{__name__}:astream - Streaming failed", e)
            yield StreamEvent(event=StreamEventType.ERROR, data={"message": APOLOGY_MESSAGE})
