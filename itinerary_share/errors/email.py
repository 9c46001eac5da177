from logging import getLogger

from starlette.status import (
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
    HTTP_504_GATEWAY_TIMEOUT,
)

from itinerary_share.configs import file_logger
from itinerary_share.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class EmailServiceError(BaseAppError):
    """Base class for all email service related errors."""

    def __init__(self, detail: str = "Email service error") -> None:
        super().__init__(
            detail=detail,
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )


class ConfigurationError(EmailServiceError):
    """Raised when the mail credential (token file) is missing or unusable."""

    def __init__(self, detail: str = "Email service not configured") -> None:
        super().__init__(detail)


class AuthenticationError(EmailServiceError):
    """Raised when OAuth2 token refresh fails."""

    def __init__(self, detail: str = "Email service authentication error") -> None:
        super().__init__(detail)


class SendingError(EmailServiceError):
    """Raised when the Gmail API refuses the message."""

    def __init__(self, detail: str = "Email service sending error") -> None:
        super().__init__(detail)
        self.status_code = HTTP_502_BAD_GATEWAY


class NetworkError(EmailServiceError):
    """Raised when network connectivity issues occur."""

    def __init__(self, detail: str = "Email service network error") -> None:
        super().__init__(detail)
        self.status_code = HTTP_503_SERVICE_UNAVAILABLE


class ProviderUnreachableError(NetworkError):
    """Raised when no connection to the provider could be opened, so nothing was sent."""

    def __init__(self, detail: str = "Email provider unreachable") -> None:
        super().__init__(detail)


class EmailTimeoutError(EmailServiceError):
    """Raised when the provider does not answer within the configured timeout."""

    def __init__(self, detail: str = "Email service timed out") -> None:
        super().__init__(detail)
        self.status_code = HTTP_504_GATEWAY_TIMEOUT


# Create the exception handler using the helper
email_client_exception_handler = create_exception_handler(logger)
