"""
Chat service for conversational Q&A with RAG.

Orchestrates the chat flows: history retrieval, answer generation and
message persistence. Supports one-shot questions, multi-turn conversations,
questions focused on selected documents, and streaming.

Dependencies: drive_qa.core.answering, drive_qa.core.conversation_store
System role: Chat service orchestration layer
"""

import logging
from collections.abc import AsyncGenerator, Sequence

from drive_qa.core.answering.answer_generator import AnswerGenerator, format_answer_with_sources
from drive_qa.core.answering.answer_prompt import EMPTY_QUESTION_MESSAGE
from drive_qa.core.conversation_store import ConversationStore
from drive_qa.core.exceptions import ConversationNotFoundError
from drive_qa.models.chat import ChatAnswer
from drive_qa.models.streaming import StreamEvent

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "default"


def _is_blank(question: str | None) -> bool:
    return not isinstance(question, str) or not question.strip()


class ChatService:
    """
    Chat service for document Q&A.

    Coordinates conversation lookup, history retrieval, answer generation
    and message persistence for multi-turn conversations.
    """

    def __init__(
        self,
        answer_generator: AnswerGenerator,
        conversation_store: ConversationStore,
    ) -> None:
        """
        Initialize chat service.

        Args:
            answer_generator: Grounded answer generator
            conversation_store: Store for multi-turn histories
        """
        self.answer_generator = answer_generator
        self.conversation_store = conversation_store

    async def ask(self, question: str) -> str:
        """
        Answer a one-shot question.

        Args:
            question: User's question

        Returns:
            str: Answer text followed by the list of source documents
        """
        answer = await self.answer_generator.answer(question)
        return format_answer_with_sources(answer)

    async def ask_with_conversation(
        self,
        question: str,
        conversation_id: str | None = None,
        user_id: str = DEFAULT_USER_ID,
    ) -> ChatAnswer:
        """
        Answer a question inside a conversation.

        Flow:
        1. Create the conversation when no id is given, else validate it exists
        2. Fetch the history (before this turn is appended)
        3. Generate the answer with the history
        4. Store the user question and the assistant answer

        Args:
            question: User's question
            conversation_id: Existing conversation id (None starts a new one)
            user_id: Owner used when a conversation is created

        Returns:
            ChatAnswer: Answer, sources and the conversation id

        Raises:
            ConversationNotFoundError: If conversation_id is unknown
        """
        return await self._converse(question, conversation_id, user_id, document_ids=None)

    async def ask_focused(
        self,
        question: str,
        document_ids: Sequence[str],
        conversation_id: str | None = None,
        user_id: str = DEFAULT_USER_ID,
    ) -> ChatAnswer:
        """
        Answer a question using only the selected documents.

        Same flow as ask_with_conversation() with retrieval restricted to
        document_ids.

        Args:
            question: User's question
            document_ids: Documents to search
            conversation_id: Existing conversation id (None starts a new one)
            user_id: Owner used when a conversation is created

        Returns:
            ChatAnswer: Answer, sources and the conversation id

        Raises:
            ConversationNotFoundError: If conversation_id is unknown
        """
        return await self._converse(question, conversation_id, user_id, document_ids=document_ids)

    async def _converse(
        self,
        question: str,
        conversation_id: str | None,
        user_id: str,
        document_ids: Sequence[str] | None,
    ) -> ChatAnswer:
        if _is_blank(question):
            return ChatAnswer(answer=EMPTY_QUESTION_MESSAGE, conversation_id=conversation_id)

        if conversation_id is None:
            conversation_id = self.conversation_store.create(user_id)
        elif self.conversation_store.get(conversation_id) is None:
            logger.error(f"{__name__}:_converse - Conversation not found: {conversation_id}")
            raise ConversationNotFoundError(conversation_id)

        history = self.conversation_store.get_history(conversation_id)
        logger.info(
            f"{__name__}:_converse - conversation_id={conversation_id}, "
            f"history={len(history)}, focused={bool(document_ids)}"
        )

        answer = await self.answer_generator.answer(
            question,
            conversation_history=history,
            document_ids=document_ids,
        )

        try:
            self.conversation_store.add_message(conversation_id, "user", question)
            self.conversation_store.add_message(conversation_id, "assistant", answer.answer)
        except ConversationNotFoundError:
            # Deleted while the answer was being generated
            logger.warning(
                f"{__name__}:_converse - Conversation {conversation_id} removed before the turn was stored"
            )

        return ChatAnswer(answer=answer.answer, sources=answer.sources, conversation_id=conversation_id)

    async def stream(
        self,
        question: str,
        document_ids: Sequence[str] | None = None,
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream an answer as events.

        Args:
            question: User's question
            document_ids: Restrict retrieval to these documents when non-empty

        Yields:
            StreamEvent: Context, token, complete or error events
        """
        logger.info(f"{__name__}:stream - START")
        async for event in self.answer_generator.astream(question, document_ids=document_ids):
            yield event
        logger.info(f"{__name__}:stream - END")
