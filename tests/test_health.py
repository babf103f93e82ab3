import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.config import PROJECT_NAME


def test_health_endpoint():
    """Test health endpoint"""
    client = TestClient(app)
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["app_name"] == PROJECT_NAME


def test_unknown_route_uses_error_envelope():
    client = TestClient(app)
    response = client.get("/api/v1/nope")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert isinstance(body["error"], str)
