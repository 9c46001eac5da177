# tests/routes/test_itinerary_routes.py
"""Tests for the itinerary save, list and share endpoints."""

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from itinerary_share.errors import (
    BackendTimeoutError,
    BackendUnavailableError,
    SendingError,
)
from itinerary_share.managers import limiter

SHARE_URL = "/api/share-itinerary"
SAVE_URL = "/api/save-itinerary"


def share_body(**overrides: Any) -> dict[str, Any]:
    return {"itineraryId": "42", "email": "jane@example.com", **overrides}


class TestSaveItinerary:
    """Tests for POST /api/save-itinerary."""

    def test_save_success(
        self,
        client: TestClient,
        fake_backend: Any,
        paris_trip: dict[str, Any],
    ) -> None:
        paris_trip.pop("id")
        paris_trip["agentNote"] = "VIP"

        response = client.post(SAVE_URL, json=paris_trip)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Itinerary saved successfully"
        assert data["itinerary"]["id"] == "new-1"
        # Unknown keys are forwarded untouched
        assert fake_backend.created == [paris_trip]

    def test_save_missing_fields(self, client: TestClient, fake_backend: Any) -> None:
        response = client.post(
            SAVE_URL,
            json={"tripTitle": "Paris Trip", "destination": "Paris", "clientName": "  "},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["detail"] == "Missing required fields"
        assert data["missingFields"] == ["startDate", "endDate", "clientName"]
        assert data["message"] == "Please provide: startDate, endDate, clientName"
        assert fake_backend.created == []

    def test_save_non_object_body(self, client: TestClient) -> None:
        response = client.post(SAVE_URL, json=["not", "an", "itinerary"])

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request body"

    def test_save_backend_failure(
        self,
        client: TestClient,
        fake_backend: Any,
        paris_trip: dict[str, Any],
    ) -> None:
        fake_backend.error = BackendUnavailableError(
            "Failed to save itinerary: backend returned 500",
        )

        response = client.post(SAVE_URL, json=paris_trip)

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to save itinerary: backend returned 500"}

    def test_save_backend_timeout(
        self,
        client: TestClient,
        fake_backend: Any,
        paris_trip: dict[str, Any],
    ) -> None:
        fake_backend.error = BackendTimeoutError()

        response = client.post(SAVE_URL, json=paris_trip)

        assert response.status_code == 504


class TestShareItinerary:
    """Tests for POST /api/share-itinerary."""

    def test_share_success(self, client: TestClient, fake_mailer: Any) -> None:
        response = client.post(SHARE_URL, json=share_body(customMessage="See you soon!"))

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Itinerary sent to jane@example.com"
        assert data["timestamp"].endswith("Z")

        assert len(fake_mailer.sent) == 1
        sent = fake_mailer.sent[0]
        assert sent["to"] == "jane@example.com"
        assert sent["subject"] == "Your Paris Trip Itinerary"
        assert "See you soon!" in sent["html"]
        assert "Dear Jane," in sent["html"]

    def test_share_numeric_id(self, client: TestClient, fake_mailer: Any) -> None:
        response = client.post(SHARE_URL, json=share_body(itineraryId=42))

        assert response.status_code == 200
        assert len(fake_mailer.sent) == 1

    @pytest.mark.parametrize(
        "body",
        [
            {"email": "jane@example.com"},
            {"itineraryId": "42"},
            {"itineraryId": "", "email": "jane@example.com"},
        ],
    )
    def test_share_missing_fields(
        self,
        client: TestClient,
        fake_backend: Any,
        body: dict[str, Any],
    ) -> None:
        response = client.post(SHARE_URL, json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required fields: itineraryId and email"
        assert fake_backend.lookups == 0

    def test_share_invalid_email(
        self,
        client: TestClient,
        fake_backend: Any,
        fake_mailer: Any,
    ) -> None:
        response = client.post(SHARE_URL, json=share_body(email="not-an-email"))

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid email format"
        assert fake_backend.lookups == 0
        assert fake_mailer.sent == []

    def test_share_unknown_itinerary(self, client: TestClient, fake_mailer: Any) -> None:
        response = client.post(SHARE_URL, json=share_body(itineraryId="999"))

        assert response.status_code == 404
        assert response.json() == {"detail": "Itinerary not found"}
        assert fake_mailer.sent == []

    def test_share_incomplete_itinerary(
        self,
        client: TestClient,
        fake_backend: Any,
        fake_mailer: Any,
        paris_trip: dict[str, Any],
    ) -> None:
        fake_backend.records = [{**paris_trip, "endDate": ""}]

        response = client.post(SHARE_URL, json=share_body())

        assert response.status_code == 400
        assert response.json() == {
            "detail": "Itinerary is incomplete",
            "missingFields": ["endDate"],
        }
        assert fake_mailer.sent == []

    def test_share_email_not_configured(
        self,
        client: TestClient,
        fake_mailer: Any,
    ) -> None:
        fake_mailer.is_configured = False

        response = client.post(SHARE_URL, json=share_body())

        assert response.status_code == 500
        assert response.json() == {"detail": "Email service not configured"}

    def test_share_provider_refusal(self, client: TestClient, fake_mailer: Any) -> None:
        fake_mailer.error = SendingError("Google API refused request: quota")

        response = client.post(SHARE_URL, json=share_body())

        assert response.status_code == 502
        assert response.json()["detail"] == "Google API refused request: quota"

    def test_share_backend_unreachable(
        self,
        client: TestClient,
        fake_backend: Any,
    ) -> None:
        fake_backend.error = BackendUnavailableError()

        response = client.post(SHARE_URL, json=share_body())

        assert response.status_code == 500


class TestListItineraries:
    """Tests for GET /api/itineraries and GET /api/itineraries/{id}."""

    def test_list(self, client: TestClient, paris_trip: dict[str, Any]) -> None:
        response = client.get("/api/itineraries")

        assert response.status_code == 200
        assert response.json() == [paris_trip]

    def test_list_relays_backend_records_as_sent(
        self,
        client: TestClient,
        fake_backend: Any,
        paris_trip: dict[str, Any],
    ) -> None:
        odd = {
            "id": 9,
            "tripTitle": "Rome",
            "status": None,
            "notes": None,
            "dailyPlans": [{"date": "2024-07-01", "activities": ["Colosseum", "Forum"]}],
        }
        fake_backend.records = [paris_trip, odd]

        response = client.get("/api/itineraries")

        assert response.status_code == 200
        assert response.json() == [paris_trip, odd]

    def test_share_unaffected_by_malformed_neighbour(
        self,
        client: TestClient,
        fake_backend: Any,
        fake_mailer: Any,
        paris_trip: dict[str, Any],
    ) -> None:
        odd = {"id": 9, "dailyPlans": [{"date": "2024-07-01", "activities": ["Colosseum"]}]}
        fake_backend.records = [odd, paris_trip]

        response = client.post(SHARE_URL, json=share_body())

        assert response.status_code == 200
        assert len(fake_mailer.sent) == 1

    def test_list_empty(self, client: TestClient, fake_backend: Any) -> None:
        fake_backend.records = []

        response = client.get("/api/itineraries")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_backend_failure(self, client: TestClient, fake_backend: Any) -> None:
        fake_backend.error = BackendUnavailableError(
            "Failed to load itineraries: itinerary backend unreachable",
        )

        response = client.get("/api/itineraries")

        assert response.status_code == 500
        assert "unreachable" in response.json()["detail"]

    def test_get_one(self, client: TestClient, paris_trip: dict[str, Any]) -> None:
        response = client.get("/api/itineraries/42")

        assert response.status_code == 200
        assert response.json() == paris_trip

    def test_get_one_keeps_null_fields(
        self,
        client: TestClient,
        fake_backend: Any,
        paris_trip: dict[str, Any],
    ) -> None:
        fake_backend.records = [{**paris_trip, "status": None, "notes": None}]

        response = client.get("/api/itineraries/42")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] is None
        assert data["notes"] is None
        assert "numberOfTravelers" in data

    def test_get_one_not_found(self, client: TestClient) -> None:
        response = client.get("/api/itineraries/999")

        assert response.status_code == 404


class TestShareRateLimit:
    """Tests for the share endpoint rate limit."""

    @pytest.fixture
    def limited_client(self, client: TestClient) -> Generator[TestClient]:
        limiter.enabled = True
        limiter.reset()
        yield client
        limiter.reset()

    def test_share_rate_limited(
        self,
        limited_client: TestClient,
        fake_mailer: Any,
    ) -> None:
        for _ in range(10):
            assert limited_client.post(SHARE_URL, json=share_body()).status_code == 200

        response = limited_client.post(SHARE_URL, json=share_body())

        assert response.status_code == 429
        assert response.json()["detail"] == "Rate limit exceeded"
        assert len(fake_mailer.sent) == 10

    def test_api_key_header_does_not_reset_limit(
        self,
        limited_client: TestClient,
        fake_mailer: Any,
    ) -> None:
        codes = [
            limited_client.post(
                SHARE_URL,
                json=share_body(),
                headers={"X-API-Key": f"key-{i}"},
            ).status_code
            for i in range(12)
        ]

        assert codes == [200] * 10 + [429] * 2
        assert len(fake_mailer.sent) == 10
