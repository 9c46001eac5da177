from itinerary_share.errors.base import BaseAppError, create_exception_handler
from itinerary_share.errors.email import (
    AuthenticationError,
    ConfigurationError,
    EmailServiceError,
    EmailTimeoutError,
    NetworkError,
    ProviderUnreachableError,
    SendingError,
    email_client_exception_handler,
)
from itinerary_share.errors.itinerary import (
    BackendResponseError,
    BackendTimeoutError,
    BackendUnavailableError,
    NotFoundError,
    UpstreamError,
    itinerary_exception_handler,
)
from itinerary_share.errors.validation import (
    ValidationError,
    app_validation_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "AuthenticationError",
    "BackendResponseError",
    "BackendTimeoutError",
    "BackendUnavailableError",
    "BaseAppError",
    "ConfigurationError",
    "EmailServiceError",
    "EmailTimeoutError",
    "NetworkError",
    "NotFoundError",
    "ProviderUnreachableError",
    "SendingError",
    "UpstreamError",
    "ValidationError",
    "app_validation_exception_handler",
    "create_exception_handler",
    "email_client_exception_handler",
    "itinerary_exception_handler",
    "validation_exception_handler",
]
