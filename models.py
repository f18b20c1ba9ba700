from __future__ import annotations

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    conint,
    constr,
    field_validator,
)

REQUIRED_FIELDS_MESSAGE = "City and duration are required."
GENERATION_FAILED_MESSAGE = "Failed to generate itinerary. Check server logs."

# -----------------------------
# Request
# -----------------------------

class ItineraryRequest(BaseModel):
    """Body of POST /api/itinerary. Unknown keys are ignored."""
    model_config = ConfigDict(extra="ignore")

    city: constr(strip_whitespace=True, min_length=1) = Field(
        description="Destination city, e.g. 'Paris'."
    )
    duration: conint(ge=1) = Field(
        description="Length of stay in days."
    )

    @field_validator("duration", mode="before")
    @classmethod
    def _reject_bool(cls, v):
        # bool is an int subclass; true would otherwise become a 1-day trip
        if isinstance(v, bool):
            raise ValueError("duration must be a number of days, not a boolean")
        return v

# -----------------------------
# Response
# -----------------------------

class ItineraryResponse(BaseModel):
    itinerary: str = Field(description="Markdown, day-by-day travel plan.")

class ErrorResponse(BaseModel):
    error: str
