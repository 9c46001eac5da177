"""Protocol definitions for the outbound clients used by the share pipeline."""

from typing import Any, Protocol, runtime_checkable

from itinerary_share.schemas.itinerary import ItineraryRecord


@runtime_checkable
class ItineraryBackendProtocol(Protocol):
    """
    Protocol for itinerary storage backend clients.

    ItineraryBackendClient conforms to this protocol; tests substitute fakes.
    """

    async def fetch_all(self) -> list[Any]:
        """Fetch every itinerary held by the backend, as sent."""
        ...

    async def fetch_by_id(self, itinerary_id: str | int) -> ItineraryRecord | None:
        """Fetch one itinerary, or None when the backend does not know it."""
        ...

    async def create(self, payload: dict[str, Any]) -> Any:
        """Store a new itinerary and return the backend's stored copy."""
        ...


@runtime_checkable
class MailerProtocol(Protocol):
    """Protocol for transactional email clients."""

    @property
    def is_configured(self) -> bool:
        """Whether a credential is available for sending."""
        ...

    async def send_html(self, to: str, subject: str, html: str) -> dict[str, Any]:
        """Send an HTML email and return the provider acknowledgment."""
        ...
