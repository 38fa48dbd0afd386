"""API models for pricing and accommodation endpoints."""

from pydantic import BaseModel, Field

from lakeside.models import Accommodation


class AccommodationListResponse(BaseModel):
    """All bookable accommodation units."""

    accommodations: list[Accommodation] = Field(
        ...,
        description="Accommodations with current display rates",
    )
