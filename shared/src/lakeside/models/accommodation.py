"""Accommodation listing model."""

from pydantic import Field

from .booking import CamelModel
from .enums import PriceSource


class Accommodation(CamelModel):
    """One bookable unit at the retreat."""

    id: str = Field(..., description="Accommodation ID", examples=["cottage"])
    name: str
    description: str
    max_guests: int = Field(..., ge=1)
    price: int = Field(..., ge=0, description="Displayed nightly rate")
    price_source: PriceSource
