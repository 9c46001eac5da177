# itinerary_share/middleware/middleware.py
"""
Middleware components for the itinerary share service.

This module contains middleware for security headers, request logging and
CORS handling, plus the lifespan handler that builds the outbound clients
at startup and closes them at shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import basicConfig, getLogger
from time import perf_counter

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from rich.logging import RichHandler
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from itinerary_share.clients.backend_client import ItineraryBackendClient
from itinerary_share.clients.email_client import EmailClient
from itinerary_share.configs import file_logger, settings
from itinerary_share.utils.helpers import get_summary, host

# --- Logging Configuration ---
basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(message)s",
    datefmt="%X",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logger = file_logger(getLogger("itinerary_share"))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Build the shared clients at startup and release them at shutdown."""
    logger.info(f"Starting {app.title}...")

    try:
        if settings.LOG_TO_FILE:
            logger.info(f"Logging to file enabled: {settings.LOG_FILE}")

        app.state.backend_client = ItineraryBackendClient()
        logger.info(f"Itinerary backend: {app.state.backend_client.base_url}")

        app.state.email_client = EmailClient()
        if app.state.email_client.is_configured:
            logger.info("Email client configured.")
        else:
            logger.warning("No Gmail token found, email delivery is disabled.")

        logger.info("Services initialized successfully")
        logger.info(f"  - Itinerary share service: http://localhost:{settings.PORT}")
        logger.info(f"  - Health Check: http://localhost:{settings.PORT}/health")

    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info(f"Shutting down {app.title}...")
    try:
        await app.state.backend_client.close()
        logger.info("Services cleaned up successfully")
    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.FRONTEND_URLS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information."""

        start_time = perf_counter()
        summary = get_summary(request)

        route_info = summary or f"{request.method} {request.url.path}"
        logger.info(f"Request: {route_info}, from ip: {host(request)}")

        response = await call_next(request)
        duration = perf_counter() - start_time

        logger.info(
            f"Response: {response.status_code} for {request.method} {request.url.path} "
            f"in {duration:.2f}s",
        )

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
