from logging import getLogger

from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_504_GATEWAY_TIMEOUT,
)

from itinerary_share.configs import file_logger
from itinerary_share.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class NotFoundError(BaseAppError):
    """Raised when a referenced itinerary does not exist in the backend."""

    def __init__(self, detail: str = "Itinerary not found") -> None:
        super().__init__(detail=detail, status_code=HTTP_404_NOT_FOUND)


class UpstreamError(BaseAppError):
    """Base class for failures of the itinerary storage backend."""

    def __init__(self, detail: str = "Itinerary backend error") -> None:
        super().__init__(detail=detail, status_code=HTTP_500_INTERNAL_SERVER_ERROR)


class BackendUnavailableError(UpstreamError):
    """Raised when the backend is unreachable or answers with a non-success status."""

    def __init__(self, detail: str = "Itinerary backend unavailable") -> None:
        super().__init__(detail)


class BackendResponseError(UpstreamError):
    """Raised when the backend answers with a payload that cannot be used."""

    def __init__(self, detail: str = "Invalid response from itinerary backend") -> None:
        super().__init__(detail)


class BackendTimeoutError(UpstreamError):
    """Raised when the backend does not answer within the configured timeout."""

    def __init__(self, detail: str = "Itinerary backend timed out") -> None:
        super().__init__(detail)
        self.status_code = HTTP_504_GATEWAY_TIMEOUT


itinerary_exception_handler = create_exception_handler(logger)
