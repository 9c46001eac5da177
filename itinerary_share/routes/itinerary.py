# itinerary_share/routes/itinerary.py
"""
Itinerary Routes.

Endpoints to save itineraries to the storage backend, list them, and email
them to clients.

Rate Limiting
-------------
Sharing sends real email and is rate limited per client; `429` is returned
when the limit is exceeded.
"""

from logging import getLogger
from typing import Annotated, Any

from fastapi import APIRouter, Body, Request, Response
from fastapi.responses import ORJSONResponse

from itinerary_share.configs import file_logger, settings
from itinerary_share.dependencies import BackendDep, EmailDep
from itinerary_share.managers import limiter
from itinerary_share.schemas import (
    SaveItineraryResponse,
    ShareItineraryRequest,
    ShareItineraryResponse,
)
from itinerary_share.services import (
    get_itinerary,
    list_itineraries,
    save_itinerary,
    share_itinerary,
)

logger = file_logger(getLogger(__name__))

router = APIRouter(prefix="/api", tags=["🧳 Itineraries"])

_EXAMPLE_ITINERARY = {
    "tripTitle": "Paris Trip",
    "destination": "Paris",
    "startDate": "2024-06-01",
    "endDate": "2024-06-10",
    "clientName": "Jane Doe",
    "numberOfTravelers": 2,
    "tripType": "Leisure",
    "dailyPlans": [
        {"date": "2024-06-01", "weather": "Sunny", "activities": "Eiffel Tower"},
    ],
}


@router.post(
    "/save-itinerary",
    response_model=SaveItineraryResponse,
    summary="Save an itinerary",
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Itinerary saved successfully",
                        "itinerary": {"id": 1, **_EXAMPLE_ITINERARY},
                    },
                },
            },
        },
        400: {
            "description": "Missing required fields",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Missing required fields",
                        "missingFields": ["clientName"],
                        "message": "Please provide: clientName",
                    },
                },
            },
        },
    },
    operation_id="save_itinerary",
)
async def save(
    request: Request,
    payload: Annotated[
        dict[str, Any],
        Body(examples=[_EXAMPLE_ITINERARY]),
    ],
    backend: BackendDep,
) -> ORJSONResponse:
    """
    Validate an itinerary and forward it to the storage backend.

    Parameters
    ----------
    request : Request
        Current request context.
    payload : dict[str, Any]
        Itinerary record, forwarded unchanged when complete.
    backend : ItineraryBackendClient
        Storage backend dependency.

    Returns
    -------
    ORJSONResponse
        Success flag, message and the stored itinerary.

    Examples
    --------
    Request
        POST /api/save-itinerary
        Body: {"tripTitle": "Paris Trip", "destination": "Paris", ...}
    Response
        200 OK
        {"success": true, "message": "Itinerary saved successfully", "itinerary": {...}}
    """
    result = await save_itinerary(payload, backend)
    return ORJSONResponse(content=result.model_dump(mode="json", by_alias=True))


@router.post(
    "/share-itinerary",
    response_model=ShareItineraryResponse,
    summary="Email an itinerary to a client",
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Itinerary sent to jane@example.com",
                        "timestamp": "2024-05-20T10:00:00.000Z",
                    },
                },
            },
        },
        400: {
            "description": "Missing fields, invalid email or incomplete itinerary",
            "content": {"application/json": {"example": {"detail": "Invalid email format"}}},
        },
        404: {
            "description": "Itinerary not found",
            "content": {"application/json": {"example": {"detail": "Itinerary not found"}}},
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
        },
    },
    operation_id="share_itinerary",
)
@limiter.limit(settings.SHARE_RATE_LIMIT)
async def share(
    request: Request,
    response: Response,
    share_req: Annotated[
        ShareItineraryRequest,
        Body(
            examples=[
                {
                    "itineraryId": "1",
                    "email": "jane@example.com",
                    "customMessage": "Can't wait for your trip!",
                },
            ],
        ),
    ],
    backend: BackendDep,
    mailer: EmailDep,
) -> ORJSONResponse:
    """
    Email a stored itinerary as a formatted HTML document.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Current response context.
    share_req : ShareItineraryRequest
        Itinerary identifier, recipient and optional personal message.
    backend : ItineraryBackendClient
        Storage backend dependency.
    mailer : EmailClient
        Email client dependency.

    Returns
    -------
    ORJSONResponse
        Success flag, message and delivery timestamp.

    Notes
    -----
    The recipient address is checked before the backend is contacted.
    """
    result = await share_itinerary(share_req, backend, mailer)
    return ORJSONResponse(content=result.model_dump(by_alias=True))


@router.get(
    "/itineraries",
    summary="List itineraries",
    response_class=ORJSONResponse,
    operation_id="list_itineraries",
)
async def list_all(request: Request, backend: BackendDep) -> ORJSONResponse:
    """Return every itinerary held by the storage backend."""
    return ORJSONResponse(content=await list_itineraries(backend))


@router.get(
    "/itineraries/{itinerary_id}",
    summary="Get an itinerary",
    response_class=ORJSONResponse,
    responses={
        404: {
            "description": "Itinerary not found",
            "content": {"application/json": {"example": {"detail": "Itinerary not found"}}},
        },
    },
    operation_id="get_itinerary",
)
async def get_one(request: Request, itinerary_id: str, backend: BackendDep) -> ORJSONResponse:
    """Return a single itinerary by identifier."""
    record = await get_itinerary(itinerary_id, backend)
    return ORJSONResponse(content=record.to_payload())
