# tests/main/test_main.py
"""Tests for the application entry points and lifespan."""

from typing import Any

from fastapi.testclient import TestClient

from itinerary_share import app
from itinerary_share.clients.backend_client import ItineraryBackendClient
from itinerary_share.clients.email_client import EmailClient
from itinerary_share.configs import SERVICE_NAME, settings


def test_root_endpoint(client: TestClient) -> None:
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": f"Welcome to {settings.APP_NAME}"}


def test_health_check(client: TestClient) -> None:
    """Test health check reports the configured mailer."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "service": SERVICE_NAME,
        "emailConfigured": True,
    }


def test_health_check_without_email(client: TestClient, fake_mailer: Any) -> None:
    """Health stays ok when email is not configured."""
    fake_mailer.is_configured = False

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["emailConfigured"] is False


def test_security_headers(client: TestClient) -> None:
    response = client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_lifespan_builds_clients() -> None:
    """The lifespan puts one backend client and one email client on app state."""
    with TestClient(app):
        assert isinstance(app.state.backend_client, ItineraryBackendClient)
        assert isinstance(app.state.email_client, EmailClient)
