"""Tests for health check endpoints."""

from fastapi.testclient import TestClient

from mealplanner.main import app


def test_health_check() -> None:
    """Test basic health check endpoint."""
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "mealplanner-api"}


def test_root_endpoint() -> None:
    """Test root endpoint returns API info."""
    client = TestClient(app)
    response = client.get("/")
    assert response.status_code == 200

    data = response.json()
    assert data["name"] == "Mealplanner API"
    assert "version" in data
    assert data["docs"] == "/docs"


def test_request_id_is_echoed() -> None:
    """Test that a client-supplied request id comes back on the response."""
    client = TestClient(app)
    response = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


def test_request_id_is_generated() -> None:
    """Test that a request id is generated when the client sends none."""
    client = TestClient(app)
    response = client.get("/health")
    assert len(response.headers["X-Request-ID"]) == 32
