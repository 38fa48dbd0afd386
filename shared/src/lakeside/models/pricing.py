"""Price quote model."""

import datetime as dt

from pydantic import Field

from .booking import CamelModel


class PriceQuote(CamelModel):
    """Pricing breakdown for a stay.

    Derived from accommodation and dates on every request; never stored.
    Amounts are whole currency units (NZD dollars).
    """

    accommodation_id: str
    check_in: dt.date
    check_out: dt.date
    nightly_rate: int = Field(..., ge=0, description="Nightly rate")
    nights: int = Field(..., ge=1, description="Number of nights")
    subtotal: int = Field(..., ge=0, description="nightly_rate * nights")
    service_fee: int = Field(..., ge=0, description="5% of subtotal")
    tax: int = Field(..., ge=0, description="15% GST on subtotal + fee")
    total: int = Field(..., ge=0, description="subtotal + service_fee + tax")
    currency: str = Field(default="NZD", description="Currency code")
