# itinerary_share/services/itinerary.py

"""
Save and share pipelines for itineraries.

Each operation runs its steps in order and stops at the first failure, so a
caller either gets the full result or an error and nothing is half done.
"""

from datetime import datetime
from logging import getLogger
from typing import Any

from itinerary_share.clients.protocols import ItineraryBackendProtocol, MailerProtocol
from itinerary_share.configs import file_logger
from itinerary_share.errors import ConfigurationError, NotFoundError, ValidationError
from itinerary_share.schemas import (
    ItineraryRecord,
    SaveItineraryResponse,
    ShareItineraryRequest,
    ShareItineraryResponse,
)
from itinerary_share.services.email_template_builder import build_subject, render_itinerary_email
from itinerary_share.services.validator import is_valid_email, validate_itinerary
from itinerary_share.utils import utc_timestamp

logger = file_logger(getLogger(__name__))


async def save_itinerary(
    payload: dict[str, Any],
    backend: ItineraryBackendProtocol,
) -> SaveItineraryResponse:
    """
    Validate an itinerary and forward it to the storage backend.

    Args:
        payload: Itinerary JSON as sent by the caller.
        backend: Storage backend client.

    Returns:
        The success payload with the backend's stored copy.

    Raises:
        ValidationError: If a required field is missing or blank.
    """
    validation = validate_itinerary(payload)
    if not validation.is_valid:
        fields = ", ".join(validation.missing_fields)
        logger.warning(f"Save itinerary rejected, missing fields: {fields}")
        mssg = "Missing required fields"
        raise ValidationError(
            mssg,
            missing_fields=validation.missing_fields,
            message=f"Please provide: {fields}",
        )

    saved = await backend.create(payload)
    return SaveItineraryResponse(itinerary=saved)


async def list_itineraries(backend: ItineraryBackendProtocol) -> list[Any]:
    """Return every itinerary known to the backend, untouched."""
    return await backend.fetch_all()


async def get_itinerary(
    itinerary_id: str | int,
    backend: ItineraryBackendProtocol,
) -> ItineraryRecord:
    """
    Look up one itinerary.

    Raises:
        NotFoundError: If the backend has no itinerary with this identifier.
    """
    record = await backend.fetch_by_id(itinerary_id)
    if record is None:
        logger.warning(f"Itinerary {itinerary_id} not found")
        raise NotFoundError
    return record


async def share_itinerary(
    share_req: ShareItineraryRequest,
    backend: ItineraryBackendProtocol,
    mailer: MailerProtocol,
    sent_at: datetime | None = None,
) -> ShareItineraryResponse:
    """
    Email an itinerary to a recipient.

    The request is checked before the backend is contacted, and the stored
    record is re-validated because it may have changed since it was saved.

    Args:
        share_req: Identifier, recipient and optional personal message.
        backend: Storage backend client.
        mailer: Email client.
        sent_at: Moment of sharing, shown in the email footer and returned as
            the timestamp; defaults to now.

    Returns:
        The success payload with the delivery timestamp.

    Raises:
        ValidationError: If the request or the stored itinerary is incomplete,
            or the recipient address is malformed.
        NotFoundError: If the itinerary does not exist.
        ConfigurationError: If no mail credential is available.
    """
    sent_at = sent_at or datetime.now().astimezone()
    itinerary_id, email = share_req.itinerary_id, share_req.email
    if itinerary_id is None or str(itinerary_id).strip() == "" or not email:
        mssg = "Missing required fields: itineraryId and email"
        raise ValidationError(mssg)

    if not is_valid_email(email):
        logger.warning(f"Share itinerary {itinerary_id} rejected, invalid email format")
        mssg = "Invalid email format"
        raise ValidationError(mssg)

    record = await get_itinerary(itinerary_id, backend)

    validation = validate_itinerary(record)
    if not validation.is_valid:
        logger.warning(
            f"Itinerary {itinerary_id} is incomplete: {', '.join(validation.missing_fields)}",
        )
        mssg = "Itinerary is incomplete"
        raise ValidationError(mssg, missing_fields=validation.missing_fields)

    if not mailer.is_configured:
        logger.error(f"Cannot share itinerary {itinerary_id}: email service not configured")
        raise ConfigurationError

    html = render_itinerary_email(record, share_req.custom_message, sent_at)
    await mailer.send_html(to=email, subject=build_subject(record), html=html)

    logger.info(f"Itinerary email sent to {email} for trip: {record.trip_title}")
    return ShareItineraryResponse(
        message=f"Itinerary sent to {email}",
        timestamp=utc_timestamp(sent_at),
    )
