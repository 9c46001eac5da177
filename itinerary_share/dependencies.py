# itinerary_share/dependencies.py

"""Request-scoped access to the clients built in the application lifespan."""

from typing import Annotated

from fastapi import Depends, Request

from itinerary_share.clients.backend_client import ItineraryBackendClient
from itinerary_share.clients.email_client import EmailClient


def get_backend_client(request: Request) -> ItineraryBackendClient:
    return request.app.state.backend_client


def get_email_client(request: Request) -> EmailClient:
    return request.app.state.email_client


BackendDep = Annotated[ItineraryBackendClient, Depends(get_backend_client)]
EmailDep = Annotated[EmailClient, Depends(get_email_client)]
