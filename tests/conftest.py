# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from itinerary_share import app
from itinerary_share.dependencies import get_backend_client, get_email_client
from itinerary_share.managers import limiter
from itinerary_share.schemas import ItineraryRecord

PARIS_TRIP: dict[str, Any] = {
    "id": "42",
    "tripTitle": "Paris Trip",
    "destination": "Paris",
    "startDate": "2024-06-01",
    "endDate": "2024-06-10",
    "clientName": "Jane Doe",
    "numberOfTravelers": 2,
    "tripType": "Leisure",
    "status": "Confirmed",
    "notes": "Window seat please",
    "dailyPlans": [
        {"date": "2024-06-01", "weather": "Sunny", "activities": "Eiffel Tower"},
        {"date": "2024-06-02"},
    ],
}


class FakeBackend:
    """In-memory stand-in for the itinerary storage backend."""

    def __init__(self, records: list[dict[str, Any]] | None = None) -> None:
        self.records: list[dict[str, Any]] = list(records or [])
        self.created: list[dict[str, Any]] = []
        self.lookups = 0
        self.error: Exception | None = None

    async def fetch_all(self) -> list[dict[str, Any]]:
        if self.error:
            raise self.error
        return list(self.records)

    async def fetch_by_id(self, itinerary_id: str | int) -> ItineraryRecord | None:
        self.lookups += 1
        records = await self.fetch_all()
        match = next((r for r in records if str(r.get("id")) == str(itinerary_id)), None)
        return ItineraryRecord.model_validate(match) if match is not None else None

    async def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        if self.error:
            raise self.error
        self.created.append(payload)
        return {"id": "new-1", **payload}


class FakeMailer:
    """Records sent emails instead of delivering them."""

    def __init__(self, *, configured: bool = True) -> None:
        self.is_configured = configured
        self.sent: list[dict[str, str]] = []
        self.error: Exception | None = None

    async def send_html(self, to: str, subject: str, html: str) -> dict[str, Any]:
        if self.error:
            raise self.error
        self.sent.append({"to": to, "subject": subject, "html": html})
        return {"id": "mock_msg_123"}


@pytest.fixture
def paris_trip() -> dict[str, Any]:
    return {**PARIS_TRIP, "dailyPlans": [dict(day) for day in PARIS_TRIP["dailyPlans"]]}


@pytest.fixture
def fake_backend(paris_trip: dict[str, Any]) -> FakeBackend:
    return FakeBackend([paris_trip])


@pytest.fixture
def fake_mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def client(fake_backend: FakeBackend, fake_mailer: FakeMailer) -> Generator[TestClient]:
    # Disable rate limiting for tests
    limiter.enabled = False
    app.dependency_overrides[get_backend_client] = lambda: fake_backend
    app.dependency_overrides[get_email_client] = lambda: fake_mailer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    # Re-enable rate limiter after test
    limiter.enabled = True
