"""API models for payment endpoints."""

import datetime as dt

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from lakeside.models import PriceQuote
from lakeside.models.booking import CamelModel


class PaymentIntentRequest(CamelModel):
    """Request to create a Stripe PaymentIntent for a stay.

    The amount is calculated server-side from the stay, never taken from
    the client.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "accommodationId": "cottage",
                    "checkIn": "2024-06-01",
                    "checkOut": "2024-06-04",
                    "guests": 2,
                }
            ]
        },
    )

    accommodation_id: str = Field(..., min_length=1, examples=["cottage"])
    check_in: dt.date = Field(..., description="Check-in date (YYYY-MM-DD)")
    check_out: dt.date = Field(..., description="Check-out date (YYYY-MM-DD)")
    guests: int = Field(default=2, ge=1, description="Total number of guests")


class PaymentIntentResponse(CamelModel):
    """Client secret for Stripe.js plus the pricing it was created for."""

    client_secret: str = Field(..., description="PaymentIntent client secret")
    payment_intent_id: str = Field(..., description="Stripe PaymentIntent ID")
    pricing: PriceQuote
