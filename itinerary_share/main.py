# itinerary_share/main.py

"""Itinerary Share Service - relays itineraries to storage and emails them to clients."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded

from itinerary_share.configs import SERVICE_NAME, settings
from itinerary_share.dependencies import EmailDep
from itinerary_share.errors import (
    EmailServiceError,
    NotFoundError,
    UpstreamError,
    ValidationError,
    app_validation_exception_handler,
    email_client_exception_handler,
    itinerary_exception_handler,
    validation_exception_handler,
)
from itinerary_share.managers import limiter, rate_limit_exceeded_handler
from itinerary_share.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from itinerary_share.routes import itinerary_router
from itinerary_share.schemas import HealthCheckResponse

app = FastAPI(
    title=settings.APP_NAME,
    description="Saves itineraries to the storage backend and emails them to clients",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

app.include_router(itinerary_router)

errors = [
    (ValidationError, app_validation_exception_handler),
    (NotFoundError, itinerary_exception_handler),
    (UpstreamError, itinerary_exception_handler),
    (EmailServiceError, email_client_exception_handler),
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "service": SERVICE_NAME,
                        "emailConfigured": True,
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check(request: Request, mailer: EmailDep) -> ORJSONResponse:
    """
    Health check endpoint.

    Parameters
    ----------
    request : Request
        Current request context.
    mailer : EmailClient
        Email client dependency.

    Returns
    -------
    ORJSONResponse
        Service name and whether email delivery is configured.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"status": "ok", "service": "itinerary-share", "emailConfigured": true}
    """
    health = HealthCheckResponse(service=SERVICE_NAME, email_configured=mailer.is_configured)
    return ORJSONResponse(health.model_dump(by_alias=True))


@app.get(
    "/",
    tags=["🏠 Root"],
    summary="Root access",
    response_model=dict[str, str],
    response_class=ORJSONResponse,
    operation_id="root_access",
)
async def root(request: Request) -> ORJSONResponse:
    """Root endpoint."""
    return ORJSONResponse(content={"message": f"Welcome to {settings.APP_NAME}"})
