"""Completeness checks for itinerary records and recipient addresses."""

from collections.abc import Mapping
from re import compile as re_compile
from typing import Any

from pydantic import BaseModel

from itinerary_share.schemas.itinerary import ItineraryValidation

# Checked in this order; missing fields are always reported in this order
REQUIRED_FIELDS: tuple[str, ...] = (
    "tripTitle",
    "destination",
    "startDate",
    "endDate",
    "clientName",
)

# local@domain.tld, no whitespace and a single "@"
_EMAIL_PATTERN = re_compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def validate_itinerary(record: Mapping[str, Any] | BaseModel) -> ItineraryValidation:
    """
    Check that an itinerary carries every required field.

    A field is missing when it is absent, null, or empty once converted to
    text and trimmed.

    Args:
        record: Raw camelCase JSON mapping or an ``ItineraryRecord``.

    Returns:
        The validation outcome with missing fields in ``REQUIRED_FIELDS`` order.
    """
    data = record.model_dump(by_alias=True) if isinstance(record, BaseModel) else record
    missing = [field for field in REQUIRED_FIELDS if _is_blank(data.get(field))]
    return ItineraryValidation(is_valid=not missing, missing_fields=missing)


def is_valid_email(email: str) -> bool:
    """Return True if ``email`` has the basic ``local@domain.tld`` shape."""
    return bool(_EMAIL_PATTERN.match(email))
