"""
Dependency injection container.

Builds the process-wide service graph once and hands it to FastAPI routes.

Dependencies: drive_qa.configs, drive_qa.core, drive_qa.application, drive_qa.boundary
System role: DI container for service injection
"""

from fastapi import Depends, Header, Request

from drive_qa.application.services.chat_service import DEFAULT_USER_ID, ChatService
from drive_qa.configs import Settings, get_settings
from drive_qa.core.conversation_store import ConversationStore
from drive_qa.core.indexing.index_orchestrator import IndexOrchestrator


class ServiceContainer:
    """
    Container for the long-lived service instances.

    One container exists per application; every property is created on
    first access and reused afterwards, so the vector index, embedding
    cache and conversations are shared by all requests.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._embeddings = None
        self._chat_model = None
        self._document_source = None
        self._vector_index = None
        self._embedding_provider = None
        self._index_orchestrator = None
        self._retriever = None
        self._answer_generator = None
        self._conversation_store = None
        self._chat_service = None

    @property
    def embeddings(self):
        """Get cached embeddings backend."""
        if self._embeddings is None:
            from drive_qa.core.embeddings.embeddings_wrapper import FixedDimensionEmbeddings

            self._embeddings = FixedDimensionEmbeddings(
                model=self.settings.llm.embedding_model,
                output_dimensionality=self.settings.rag.embedding_dimension,
            )
        return self._embeddings

    @property
    def chat_model(self):
        """Get cached chat model."""
        if self._chat_model is None:
            from langchain_google_genai import ChatGoogleGenerativeAI

            self._chat_model = ChatGoogleGenerativeAI(
                model=self.settings.llm.chat_model,
                temperature=self.settings.llm.temperature,
                max_output_tokens=self.settings.llm.max_output_tokens,
            )
        return self._chat_model

    @property
    def document_source(self):
        """Get cached document source."""
        if self._document_source is None:
            from drive_qa.boundary.storage.s3_document_source import S3DocumentSource

            s3 = self.settings.s3_documents
            self._document_source = S3DocumentSource(bucket=s3.bucket, region=s3.region, prefix=s3.prefix)
        return self._document_source

    @property
    def vector_index(self):
        """Get cached vector index."""
        if self._vector_index is None:
            from drive_qa.boundary.vdb.vector_index import VectorIndex

            self._vector_index = VectorIndex()
        return self._vector_index

    @property
    def embedding_provider(self):
        """Get cached embedding provider."""
        if self._embedding_provider is None:
            from drive_qa.core.embeddings.embedding_provider import EmbeddingProvider

            rag = self.settings.rag
            self._embedding_provider = EmbeddingProvider(
                embeddings=self.embeddings,
                dimension=rag.embedding_dimension,
                max_chars=rag.embedding_max_chars,
                retry_max_attempts=rag.retry_max_attempts,
                retry_initial_delay=rag.retry_initial_delay,
            )
        return self._embedding_provider

    @property
    def index_orchestrator(self) -> IndexOrchestrator:
        """Get cached index orchestrator."""
        if self._index_orchestrator is None:
            from drive_qa.core.chunker import TextChunker

            rag = self.settings.rag
            self._index_orchestrator = IndexOrchestrator(
                source=self.document_source,
                index=self.vector_index,
                embedding_provider=self.embedding_provider,
                chunker=TextChunker(rag.chunk_max_chars),
                max_documents=rag.max_documents,
                index_ttl_seconds=rag.index_ttl_seconds,
                min_content_chars=rag.min_content_chars,
                min_chunk_chars=rag.min_chunk_chars,
            )
        return self._index_orchestrator

    @property
    def retriever(self):
        """Get cached retriever."""
        if self._retriever is None:
            from drive_qa.core.retriever import Retriever

            self._retriever = Retriever(
                index=self.vector_index,
                embedding_provider=self.embedding_provider,
                default_top_k=self.settings.rag.search_top_k,
                similarity_threshold=self.settings.rag.similarity_threshold,
            )
        return self._retriever

    @property
    def answer_generator(self):
        """Get cached answer generator."""
        if self._answer_generator is None:
            from drive_qa.core.answering.answer_generator import AnswerGenerator

            rag = self.settings.rag
            self._answer_generator = AnswerGenerator(
                orchestrator=self.index_orchestrator,
                retriever=self.retriever,
                chat_model=self.chat_model,
                answer_top_k=rag.answer_top_k,
                history_window=rag.history_window,
                retry_max_attempts=rag.retry_max_attempts,
                retry_initial_delay=rag.retry_initial_delay,
            )
        return self._answer_generator

    @property
    def conversation_store(self) -> ConversationStore:
        """Get cached conversation store."""
        if self._conversation_store is None:
            self._conversation_store = ConversationStore()
        return self._conversation_store

    @property
    def chat_service(self) -> ChatService:
        """Get cached chat service."""
        if self._chat_service is None:
            self._chat_service = ChatService(
                answer_generator=self.answer_generator,
                conversation_store=self.conversation_store,
            )
        return self._chat_service


def get_service_container(request: Request) -> ServiceContainer:
    """
    Get the application's service container.

    The container is attached to app.state by create_app().
    """
    return request.app.state.services


def get_chat_service(container: ServiceContainer = Depends(get_service_container)) -> ChatService:
    """
    Get chat service instance.

    Args:
        container: Service container (injected via Depends)

    Returns:
        ChatService: Chat service sharing the process-wide index and conversations
    """
    return container.chat_service


def get_index_orchestrator(
    container: ServiceContainer = Depends(get_service_container),
) -> IndexOrchestrator:
    """Get index orchestrator instance."""
    return container.index_orchestrator


def get_conversation_store(
    container: ServiceContainer = Depends(get_service_container),
) -> ConversationStore:
    """Get conversation store instance."""
    return container.conversation_store


def get_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """
    Resolve the caller's user id from the X-User-ID header.

    Returns:
        str: Header value, or "default" when absent or blank
    """
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return DEFAULT_USER_ID
