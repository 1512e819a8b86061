"""
Basic test to verify the project setup is working correctly.
"""

import pytest
from fastapi.testclient import TestClient
from awadiko.main import app


def test_app_creation():
    """Test that the FastAPI app can be created successfully."""
    assert app is not None
    assert app.title == "AwaDiko Dictionary"


def test_root_endpoint():
    """Test the root endpoint returns expected response."""
    client = TestClient(app)
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data
    assert data["status"] == "running"


def test_request_id_is_echoed():
    client = TestClient(app)
    response = client.get("/", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_health_endpoint():
    client = TestClient(app)
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["details"]["database"]["status"] == "healthy"
    assert data["details"]["cache"]["status"] == "disabled"
    assert "error_statistics" in data


def test_routes_registered():
    paths = {route.path for route in app.routes}
    for expected in (
        "/auth/login",
        "/admin/concepts",
        "/admin/domains",
        "/admin/terms/upload",
        "/dictionary/terms",
        "/review/requests/pending",
        "/neos/curate",
        "/api/language/english",
    ):
        assert expected in paths


if __name__ == "__main__":
    pytest.main([__file__])
