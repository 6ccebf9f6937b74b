"""
Test suite for conversation API endpoints.

Tests listing, fetching and deleting conversations over a real in-memory
ConversationStore.

System role: Verification of conversation management HTTP API
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from drive_qa.api.deps import get_conversation_store
from drive_qa.core.conversation_store import ConversationStore
from drive_qa.main import create_app


@pytest.fixture
def store() -> ConversationStore:
    """Provide store with one conversation for alice and one for bob."""
    store = ConversationStore()
    alice_id = store.create("alice")
    store.add_message(alice_id, "user", "Hello")
    store.create("bob")
    return store


@pytest.fixture
def app(store: ConversationStore) -> FastAPI:
    """Create application with the test store injected."""
    app = create_app()
    app.dependency_overrides[get_conversation_store] = lambda: store
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)


class TestListConversations:
    """Test suite for GET /conversations."""

    def test_list_should_filter_by_user_query(self, client: TestClient) -> None:
        """Test user_id query parameter selects the owner."""
        # Act
        response = client.get("/api/v1/conversations", params={"user_id": "alice"})

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["conversations"][0]["user_id"] == "alice"
        assert body["conversations"][0]["messages"][0]["content"] == "Hello"

    def test_list_should_fall_back_to_user_header(self, client: TestClient) -> None:
        """Test X-User-ID is used when no query parameter is given."""
        # Act
        response = client.get("/api/v1/conversations", headers={"X-User-ID": "bob"})

        # Assert
        assert response.json()["total"] == 1
        assert response.json()["conversations"][0]["user_id"] == "bob"


class TestGetAndDeleteConversation:
    """Test suite for GET and DELETE /conversations/{id}."""

    def test_get_should_return_conversation(self, client: TestClient, store: ConversationStore) -> None:
        """Test an existing conversation is returned with its messages."""
        # Arrange
        conversation_id = store.list_by_user("alice")[0].id

        # Act
        response = client.get(f"/api/v1/conversations/{conversation_id}")

        # Assert
        assert response.status_code == 200
        assert response.json()["id"] == conversation_id

    def test_get_should_return_404_for_unknown_id(self, client: TestClient) -> None:
        """Test unknown ids map to 404."""
        # Act
        response = client.get("/api/v1/conversations/missing")

        # Assert
        assert response.status_code == 404

    def test_delete_should_remove_conversation(self, client: TestClient, store: ConversationStore) -> None:
        """Test delete returns 204 then the conversation is gone."""
        # Arrange
        conversation_id = store.list_by_user("bob")[0].id

        # Act
        response = client.delete(f"/api/v1/conversations/{conversation_id}")

        # Assert
        assert response.status_code == 204
        assert store.get(conversation_id) is None
        assert client.delete(f"/api/v1/conversations/{conversation_id}").status_code == 404
