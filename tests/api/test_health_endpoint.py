"""
Test suite for health API endpoint.

Tests GET /api/v1/health and the correlation header added by middleware.

System role: Verification of health check HTTP API
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from drive_qa.api.deps import get_index_orchestrator
from drive_qa.core.indexing.index_orchestrator import IndexOrchestrator
from drive_qa.main import create_app


@pytest.fixture
def app(orchestrator: IndexOrchestrator) -> FastAPI:
    """Create application with the test orchestrator injected."""
    app = create_app()
    app.dependency_overrides[get_index_orchestrator] = lambda: orchestrator
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)


class TestHealthEndpoint:
    """Test suite for GET /health."""

    def test_health_should_report_healthy(self, client: TestClient) -> None:
        """Test health check returns status and index size."""
        # Act
        response = client.get("/api/v1/health")

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "message": "Server Healthy",
            "indexed_chunks": 0,
        }

    def test_health_should_echo_correlation_id(self, client: TestClient) -> None:
        """Test a supplied correlation id is returned on the response."""
        # Act
        response = client.get("/api/v1/health", headers={"X-Correlation-ID": "corr-123"})

        # Assert
        assert response.headers["X-Correlation-ID"] == "corr-123"

    def test_health_should_generate_correlation_id(self, client: TestClient) -> None:
        """Test a correlation id is generated when none is supplied."""
        # Act
        response = client.get("/api/v1/health")

        # Assert
        assert response.headers["X-Correlation-ID"]
