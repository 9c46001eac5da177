from itinerary_share.services.email_template_builder import (
    ItineraryEmailBuilder,
    build_subject,
    render_itinerary_email,
)
from itinerary_share.services.itinerary import (
    get_itinerary,
    list_itineraries,
    save_itinerary,
    share_itinerary,
)
from itinerary_share.services.validator import (
    REQUIRED_FIELDS,
    is_valid_email,
    validate_itinerary,
)

__all__ = [
    "REQUIRED_FIELDS",
    "ItineraryEmailBuilder",
    "build_subject",
    "get_itinerary",
    "is_valid_email",
    "list_itineraries",
    "render_itinerary_email",
    "save_itinerary",
    "share_itinerary",
    "validate_itinerary",
]
