# itinerary_share/clients/backend_client.py

"""Async HTTP client for the itinerary storage backend."""

from logging import getLogger
from typing import Any

from httpx import (
    AsyncBaseTransport,
    AsyncClient,
    ConnectError,
    HTTPError,
    Response,
    TimeoutException,
)
from pydantic import ValidationError as PydanticValidationError

from itinerary_share.configs import ITINERARIES_PATH, file_logger, settings
from itinerary_share.decorators import with_retry
from itinerary_share.errors import (
    BackendResponseError,
    BackendTimeoutError,
    BackendUnavailableError,
)
from itinerary_share.schemas.itinerary import ItineraryRecord

logger = file_logger(getLogger(__name__))


class ItineraryBackendClient:
    """
    Client for the service that owns itinerary records.

    The backend only exposes a list endpoint and a create endpoint, so single
    records are looked up by filtering the full list. Listed records are
    relayed as the backend sent them; only a looked-up record is parsed.

    Attributes:
        base_url: Root URL of the backend, e.g. ``http://localhost:3001``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client with its own connection pool."""
        self.base_url = base_url or settings.ITINERARY_BACKEND_URL
        self._client = AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.BACKEND_TIMEOUT,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    @with_retry(
        max_retries=settings.BACKEND_MAX_RETRIES,
        base_delay=settings.BACKEND_RETRY_DELAY,
        max_delay=settings.BACKEND_MAX_RETRY_DELAY,
    )
    async def _send(self, method: str, path: str, **kwargs: Any) -> Response:
        return await self._client.request(method, path, **kwargs)

    # A timed out write may already be stored, so only refused connections are retried
    @with_retry(
        max_retries=settings.BACKEND_MAX_RETRIES,
        base_delay=settings.BACKEND_RETRY_DELAY,
        max_delay=settings.BACKEND_MAX_RETRY_DELAY,
        exec_retry=(ConnectError,),
    )
    async def _send_write(self, method: str, path: str, **kwargs: Any) -> Response:
        return await self._client.request(method, path, **kwargs)

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        *,
        idempotent: bool = True,
        **kwargs: Any,
    ) -> Any:
        """
        Perform a request and decode its JSON body.

        Raises:
            BackendTimeoutError: If the backend did not answer in time.
            BackendUnavailableError: If the backend is unreachable or not successful.
            BackendResponseError: If the body is not JSON.
        """
        send = self._send if idempotent else self._send_write
        try:
            response = await send(method, path, **kwargs)
        except TimeoutException as e:
            logger.exception(f"Backend timed out during {operation}")
            mssg = f"Itinerary backend timed out while trying to {operation}"
            raise BackendTimeoutError(mssg) from e
        except HTTPError as e:
            logger.exception(f"Backend unreachable during {operation}")
            mssg = f"Failed to {operation}: itinerary backend unreachable"
            raise BackendUnavailableError(mssg) from e

        if response.is_error:
            logger.warning(f"Backend returned {response.status_code} during {operation}")
            mssg = f"Failed to {operation}: backend returned {response.status_code}"
            raise BackendUnavailableError(mssg)

        try:
            return response.json()
        except ValueError as e:
            logger.exception(f"Backend sent a non-JSON body during {operation}")
            mssg = f"Failed to {operation}: backend sent an invalid body"
            raise BackendResponseError(mssg) from e

    async def fetch_all(self) -> list[Any]:
        """
        Fetch all itineraries from the backend.

        Returns:
            Records in backend order, exactly as the backend sent them.

        Raises:
            BackendResponseError: If the payload is not a list.
        """
        data = await self._request("GET", ITINERARIES_PATH, "fetch itineraries")
        if not isinstance(data, list):
            mssg = "Failed to fetch itineraries: expected a list from backend"
            raise BackendResponseError(mssg)
        return data

    async def fetch_by_id(self, itinerary_id: str | int) -> ItineraryRecord | None:
        """
        Find a single itinerary by identifier.

        Identifiers are compared as strings, so ``42`` and ``"42"`` match.
        Other records in the list are not parsed.

        Args:
            itinerary_id: Identifier supplied by the caller.

        Returns:
            The matching record, or None.

        Raises:
            BackendResponseError: If the matching record is malformed.
        """
        wanted = str(itinerary_id)
        items = await self.fetch_all()
        match = next((item for item in items if _record_id(item) == wanted), None)
        if match is None:
            return None

        try:
            return ItineraryRecord.model_validate(match)
        except PydanticValidationError as e:
            logger.exception(f"Backend sent a malformed itinerary {wanted}")
            mssg = f"Failed to fetch itinerary {wanted}: malformed record from backend"
            raise BackendResponseError(mssg) from e

    async def create(self, payload: dict[str, Any]) -> Any:
        """
        Forward a new itinerary to the backend unchanged.

        The request is sent again only when the connection was refused, never
        after a timeout.

        Args:
            payload: Itinerary JSON as received from the caller.

        Returns:
            The stored itinerary as returned by the backend.
        """
        saved = await self._request(
            "POST",
            ITINERARIES_PATH,
            "save itinerary",
            idempotent=False,
            json=payload,
        )
        logger.info(f"Itinerary saved to backend with id: {_saved_id(saved)}")
        return saved


def _record_id(item: Any) -> str | None:
    if not isinstance(item, dict) or item.get("id") is None:
        return None
    return str(item["id"])


def _saved_id(saved: Any) -> Any:
    return saved.get("id") if isinstance(saved, dict) else None
