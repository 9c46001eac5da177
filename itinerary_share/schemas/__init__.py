from itinerary_share.schemas.health import HealthCheckResponse
from itinerary_share.schemas.itinerary import (
    DayPlan,
    DisplayValue,
    ItineraryRecord,
    ItineraryValidation,
    SaveItineraryResponse,
)
from itinerary_share.schemas.share import ShareItineraryRequest, ShareItineraryResponse

__all__ = [
    "DayPlan",
    "DisplayValue",
    "HealthCheckResponse",
    "ItineraryRecord",
    "ItineraryValidation",
    "SaveItineraryResponse",
    "ShareItineraryRequest",
    "ShareItineraryResponse",
]
