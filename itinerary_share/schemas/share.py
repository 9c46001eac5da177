from pydantic import Field

from itinerary_share.schemas.itinerary import CamelModel


class ShareItineraryRequest(CamelModel):
    """
    Request to email an itinerary to a client.

    Fields are optional at the schema level; presence and format are checked by
    the share service so that failures answer with 400 and a readable message.
    """

    itinerary_id: str | int | None = Field(default=None, examples=["42"])
    email: str | None = Field(default=None, examples=["jane@example.com"])
    custom_message: str | None = Field(
        default=None,
        examples=["Looking forward to seeing you in Paris!"],
    )


class ShareItineraryResponse(CamelModel):
    """Response body of a successful share."""

    success: bool = True
    message: str
    timestamp: str
