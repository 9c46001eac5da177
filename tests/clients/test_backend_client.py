# tests/clients/test_backend_client.py
"""Tests for the itinerary storage backend client."""

from collections.abc import Callable
from json import loads
from typing import Any

import pytest
from httpx import ConnectError, MockTransport, ReadTimeout, Request, Response
from pytest import mark

from itinerary_share.clients.backend_client import ItineraryBackendClient
from itinerary_share.configs import settings
from itinerary_share.errors import (
    BackendResponseError,
    BackendTimeoutError,
    BackendUnavailableError,
    UpstreamError,
)

Handler = Callable[[Request], Response]


def make_client(handler: Handler) -> ItineraryBackendClient:
    return ItineraryBackendClient(base_url="http://backend.test", transport=MockTransport(handler))


def list_handler(payload: Any, status_code: int = 200) -> Handler:
    def handler(request: Request) -> Response:
        assert request.url.path == "/api/itineraries"
        return Response(status_code, json=payload)

    return handler


class TestFetch:
    """Tests for fetch_all and fetch_by_id."""

    @mark.asyncio
    async def test_fetch_all_relays_records_untouched(self, paris_trip: dict[str, Any]) -> None:
        oslo = {"id": 7, "tripTitle": "Oslo", "notes": None, "agentId": "a-9"}
        client = make_client(list_handler([paris_trip, oslo]))
        records = await client.fetch_all()
        await client.close()

        assert records == [paris_trip, oslo]

    @mark.asyncio
    async def test_fetch_by_id_parses_match(self, paris_trip: dict[str, Any]) -> None:
        client = make_client(list_handler([paris_trip]))
        record = await client.fetch_by_id("42")
        await client.close()

        assert record is not None
        assert record.client_name == "Jane Doe"
        assert record.daily_plans[0].weather == "Sunny"

    @mark.asyncio
    @mark.parametrize("wanted", [42, "42"])
    async def test_fetch_by_id_compares_as_strings(
        self,
        paris_trip: dict[str, Any],
        wanted: str | int,
    ) -> None:
        client = make_client(list_handler([paris_trip]))
        record = await client.fetch_by_id(wanted)
        await client.close()

        assert record is not None
        assert record.trip_title == "Paris Trip"

    @mark.asyncio
    async def test_fetch_by_id_not_found(self, paris_trip: dict[str, Any]) -> None:
        client = make_client(list_handler([paris_trip, {"tripTitle": "no id"}]))
        assert await client.fetch_by_id("999") is None
        await client.close()

    @mark.asyncio
    async def test_non_success_status(self) -> None:
        client = make_client(list_handler({"error": "boom"}, status_code=503))
        with pytest.raises(BackendUnavailableError, match="backend returned 503") as exc_info:
            await client.fetch_all()
        await client.close()
        assert exc_info.value.status_code == 500

    @mark.asyncio
    async def test_non_list_payload(self) -> None:
        client = make_client(list_handler({"items": []}))
        with pytest.raises(BackendResponseError):
            await client.fetch_all()
        await client.close()

    @mark.asyncio
    async def test_non_json_payload(self) -> None:
        client = make_client(lambda request: Response(200, text="<html>oops</html>"))
        with pytest.raises(BackendResponseError):
            await client.fetch_all()
        await client.close()

    @mark.asyncio
    async def test_malformed_neighbour_does_not_break_lookup(
        self,
        paris_trip: dict[str, Any],
    ) -> None:
        odd = {
            "id": 9,
            "dailyPlans": [{"date": "2024-07-01", "activities": ["Colosseum", "Forum"]}],
        }
        client = make_client(list_handler([odd, paris_trip]))

        assert await client.fetch_all() == [odd, paris_trip]
        record = await client.fetch_by_id("42")
        assert record is not None
        assert record.trip_title == "Paris Trip"

        with pytest.raises(BackendResponseError, match="malformed record"):
            await client.fetch_by_id(9)
        await client.close()


class TestCreate:
    """Tests for create."""

    @mark.asyncio
    async def test_forwards_payload_unchanged(self, paris_trip: dict[str, Any]) -> None:
        received: list[dict[str, Any]] = []

        def handler(request: Request) -> Response:
            assert request.method == "POST"
            body = loads(request.content)
            received.append(body)
            return Response(201, json={**body, "id": 100})

        client = make_client(handler)
        saved = await client.create(paris_trip)
        await client.close()

        assert received == [paris_trip]
        assert saved["id"] == 100

    @mark.asyncio
    async def test_backend_error(self, paris_trip: dict[str, Any]) -> None:
        client = make_client(lambda request: Response(500, json={"error": "db down"}))
        with pytest.raises(UpstreamError, match="Failed to save itinerary"):
            await client.create(paris_trip)
        await client.close()


class TestTransportFailures:
    """Tests for timeouts and connection errors."""

    @mark.asyncio
    async def test_connect_error_retried_once_then_unavailable(self) -> None:
        attempts: list[Request] = []

        def handler(request: Request) -> Response:
            attempts.append(request)
            mssg = "connection refused"
            raise ConnectError(mssg, request=request)

        client = make_client(handler)
        with pytest.raises(BackendUnavailableError, match="unreachable"):
            await client.fetch_all()
        await client.close()

        assert len(attempts) == settings.BACKEND_MAX_RETRIES

    @mark.asyncio
    async def test_recovers_after_transient_error(self, paris_trip: dict[str, Any]) -> None:
        attempts: list[Request] = []

        def handler(request: Request) -> Response:
            attempts.append(request)
            if len(attempts) == 1:
                mssg = "connection reset"
                raise ConnectError(mssg, request=request)
            return Response(200, json=[paris_trip])

        client = make_client(handler)
        records = await client.fetch_all()
        await client.close()

        assert len(records) == 1
        assert len(attempts) == 2

    @mark.asyncio
    async def test_timeout_has_distinct_error(self) -> None:
        def handler(request: Request) -> Response:
            mssg = "read timed out"
            raise ReadTimeout(mssg, request=request)

        client = make_client(handler)
        with pytest.raises(BackendTimeoutError) as exc_info:
            await client.fetch_all()
        await client.close()

        assert exc_info.value.status_code == 504

    @mark.asyncio
    async def test_create_not_resent_after_timeout(self, paris_trip: dict[str, Any]) -> None:
        attempts: list[Request] = []

        def handler(request: Request) -> Response:
            attempts.append(request)
            mssg = "read timed out"
            raise ReadTimeout(mssg, request=request)

        client = make_client(handler)
        with pytest.raises(BackendTimeoutError):
            await client.create(paris_trip)
        await client.close()

        assert len(attempts) == 1

    @mark.asyncio
    async def test_create_resent_after_refused_connection(
        self,
        paris_trip: dict[str, Any],
    ) -> None:
        attempts: list[Request] = []

        def handler(request: Request) -> Response:
            attempts.append(request)
            if len(attempts) == 1:
                mssg = "connection refused"
                raise ConnectError(mssg, request=request)
            return Response(201, json={**paris_trip, "id": 101})

        client = make_client(handler)
        saved = await client.create(paris_trip)
        await client.close()

        assert saved["id"] == 101
        assert len(attempts) == 2
