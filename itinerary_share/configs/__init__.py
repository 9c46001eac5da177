from itinerary_share.configs.settings import (
    DEFAULT_SENDER,
    ITINERARIES_PATH,
    SERVICE_NAME,
    Settings,
    file_logger,
    settings,
)

__all__ = [
    "DEFAULT_SENDER",
    "ITINERARIES_PATH",
    "SERVICE_NAME",
    "Settings",
    "file_logger",
    "settings",
]
