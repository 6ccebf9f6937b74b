"""
Test suite for question answering API endpoints.

Tests POST /ai/query, /ai/conversation, /ai/focused and /ai/stream with
FastAPI TestClient and a mocked ChatService.

System role: Verification of Q&A HTTP API
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from drive_qa.api.deps import get_chat_service
from drive_qa.core.exceptions import ConversationNotFoundError
from drive_qa.main import create_app
from drive_qa.models.chat import ChatAnswer, Source
from drive_qa.models.streaming import StreamEvent, StreamEventType


@pytest.fixture
def mock_chat_service() -> MagicMock:
    """Provide mock ChatService."""
    service = MagicMock()
    service.ask = AsyncMock(return_value="Paris.\n\nSources:\n- geo.pdf")
    service.ask_with_conversation = AsyncMock(
        return_value=ChatAnswer(
            answer="Paris.",
            sources=[Source(document_id="doc-1", document_name="geo.pdf")],
            conversation_id="alice-1700000000000",
        )
    )
    service.ask_focused = AsyncMock(
        return_value=ChatAnswer(answer="Focused.", sources=[], conversation_id="default-1")
    )
    return service


@pytest.fixture
def app(mock_chat_service: MagicMock) -> FastAPI:
    """Create application with the mocked chat service injected."""
    app = create_app()
    app.dependency_overrides[get_chat_service] = lambda: mock_chat_service
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)


class TestQueryEndpoint:
    """Test suite for POST /ai/query."""

    def test_query_should_return_answer_with_sources(
        self,
        client: TestClient,
        mock_chat_service: MagicMock,
    ) -> None:
        """Test one-shot question returns the formatted answer."""
        # Act
        response = client.post("/api/v1/ai/query", json={"question": "Capital of France?"})

        # Assert
        assert response.status_code == 200
        assert response.json() == {"answer": "Paris.\n\nSources:\n- geo.pdf"}
        mock_chat_service.ask.assert_awaited_once_with("Capital of France?")

    def test_query_should_reject_missing_question(self, client: TestClient) -> None:
        """Test request validation requires a question."""
        # Act
        response = client.post("/api/v1/ai/query", json={})

        # Assert
        assert response.status_code == 422


class TestConversationEndpoint:
    """Test suite for POST /ai/conversation."""

    def test_conversation_should_use_user_header(
        self,
        client: TestClient,
        mock_chat_service: MagicMock,
    ) -> None:
        """Test X-User-ID is passed as the conversation owner."""
        # Act
        response = client.post(
            "/api/v1/ai/conversation",
            json={"question": "Capital of France?"},
            headers={"X-User-ID": "alice"},
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["answer"] == "Paris."
        assert body["conversation_id"] == "alice-1700000000000"
        assert body["sources"] == [{"document_id": "doc-1", "document_name": "geo.pdf"}]
        mock_chat_service.ask_with_conversation.assert_awaited_once_with(
            "Capital of France?", conversation_id=None, user_id="alice"
        )

    def test_conversation_should_default_user_id(
        self,
        client: TestClient,
        mock_chat_service: MagicMock,
    ) -> None:
        """Test requests without X-User-ID use "default"."""
        # Act
        client.post("/api/v1/ai/conversation", json={"question": "Hi", "conversation_id": "default-1"})

        # Assert
        mock_chat_service.ask_with_conversation.assert_awaited_once_with(
            "Hi", conversation_id="default-1", user_id="default"
        )

    def test_conversation_should_return_404_for_unknown_id(
        self,
        client: TestClient,
        mock_chat_service: MagicMock,
    ) -> None:
        """Test unknown conversation ids map to 404."""
        # Arrange
        mock_chat_service.ask_with_conversation.side_effect = ConversationNotFoundError("missing")

        # Act
        response = client.post(
            "/api/v1/ai/conversation",
            json={"question": "Hi", "conversation_id": "missing"},
        )

        # Assert
        assert response.status_code == 404
        assert response.json()["detail"] == "Conversation missing not found"


class TestFocusedEndpoint:
    """Test suite for POST /ai/focused."""

    def test_focused_should_pass_document_ids(
        self,
        client: TestClient,
        mock_chat_service: MagicMock,
    ) -> None:
        """Test selected documents reach the service."""
        # Act
        response = client.post(
            "/api/v1/ai/focused",
            json={"question": "Summarise", "document_ids": ["doc-1"]},
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["answer"] == "Focused."
        mock_chat_service.ask_focused.assert_awaited_once_with(
            "Summarise", document_ids=["doc-1"], conversation_id=None, user_id="default"
        )

    def test_focused_should_require_document_ids(self, client: TestClient) -> None:
        """Test document_ids is mandatory."""
        # Act
        response = client.post("/api/v1/ai/focused", json={"question": "Summarise"})

        # Assert
        assert response.status_code == 422


class TestStreamEndpoint:
    """Test suite for POST /ai/stream."""

    def test_stream_should_emit_server_sent_events(
        self,
        client: TestClient,
        mock_chat_service: MagicMock,
    ) -> None:
        """Test events are framed as SSE in order."""
        # Arrange
        async def fake_stream(question, document_ids=None):
            yield StreamEvent(event=StreamEventType.CONTEXT, data={"sources": []})
            yield StreamEvent(event=StreamEventType.TOKEN, data={"token": "Paris", "index": 0})
            yield StreamEvent(event=StreamEventType.COMPLETE, data={"full_answer": "Paris", "sources": []})

        mock_chat_service.stream = fake_stream

        # Act
        response = client.post("/api/v1/ai/stream", json={"question": "Capital?"})

        # Assert
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        body = response.text
        assert 'event: token\ndata: {"token": "Paris", "index": 0}\n\n' in body
        assert body.index("event: context") < body.index("event: token") < body.index("event: complete")

    def test_stream_should_emit_error_event_on_failure(
        self,
        client: TestClient,
        mock_chat_service: MagicMock,
    ) -> None:
        """Test an exception inside the stream becomes an error event."""
        # Arrange
        async def broken_stream(question, document_ids=None):
            raise RuntimeError("boom")
            yield  # pragma: no cover

        mock_chat_service.stream = broken_stream

        # Act
        response = client.post("/api/v1/ai/stream", json={"question": "Capital?"})

        # Assert
        assert response.status_code == 200
        assert "event: error" in response.text
