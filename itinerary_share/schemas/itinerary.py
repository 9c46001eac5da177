# itinerary_share/schemas/itinerary.py

"""
Schemas for itinerary records owned by the storage backend.

Records travel as camelCase JSON. Unknown keys are kept so that a record read
from the backend can be handed back to callers without losing data.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Scalar values the backend may send for display fields
DisplayValue = str | int | float | None


class CamelModel(BaseModel):
    """Base model reading and writing camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class DayPlan(CamelModel):
    """One day's entry within an itinerary's daily schedule."""

    date: DisplayValue = Field(default=None, description="Display date of the day")
    weather: DisplayValue = Field(default=None, description="Weather summary")
    activities: DisplayValue = Field(default=None, description="Free-text activities")


class ItineraryRecord(CamelModel):
    """Structured trip data as stored by the itinerary backend."""

    id: str | int | None = Field(default=None, description="Opaque itinerary identifier")
    trip_title: DisplayValue = Field(default=None, examples=["Paris Trip"])
    destination: DisplayValue = Field(default=None, examples=["Paris"])
    start_date: DisplayValue = Field(default=None, examples=["2024-06-01"])
    end_date: DisplayValue = Field(default=None, examples=["2024-06-10"])
    client_name: DisplayValue = Field(default=None, examples=["Jane Doe"])
    number_of_travelers: DisplayValue = Field(default=None, examples=[2])
    trip_type: DisplayValue = Field(default=None, examples=["Leisure"])
    status: DisplayValue = Field(default=None, examples=["Confirmed"])
    notes: DisplayValue = Field(default=None)
    daily_plans: list[DayPlan] | None = Field(default=None)

    def to_payload(self) -> dict[str, Any]:
        """Return the record as camelCase JSON with only the keys it was given."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ItineraryValidation(CamelModel):
    """Outcome of checking an itinerary for its required fields."""

    is_valid: bool
    missing_fields: list[str] = Field(default_factory=list)


class SaveItineraryResponse(CamelModel):
    """Response body of a successful save."""

    success: bool = True
    message: str = "Itinerary saved successfully"
    itinerary: Any = None
