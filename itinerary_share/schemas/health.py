from pydantic import Field

from itinerary_share.schemas.itinerary import CamelModel


class HealthCheckResponse(CamelModel):
    """Health check response model."""

    status: str = Field(default="ok", description="Overall health status")
    service: str = Field(description="Service name")
    email_configured: bool = Field(description="Whether a mail credential is available")
