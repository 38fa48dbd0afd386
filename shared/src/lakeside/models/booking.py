"""Booking models for the confirmed-booking flow.

Bookings serialize with camelCase keys, both on the wire and in the
durable store's JSON payload column.
"""

import re
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import BookingStatus

# Basic shape check only; deliverability is not verified
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Occupancy(CamelModel):
    """Guest counts for a stay."""

    adults: int = Field(default=2, ge=1, description="Number of adults")
    children: int = Field(default=0, ge=0, description="Number of children")


class GuestContact(CamelModel):
    """Lead guest contact details."""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=EMAIL_PATTERN.pattern)
    phone: str = Field(..., min_length=1)


class Booking(CamelModel):
    """A confirmed booking.

    Created exactly once by BookingService and never modified.
    """

    reference: str = Field(..., description="Unique booking reference")
    accommodation_id: str = Field(..., description="Accommodation unit ID")
    check_in: date = Field(..., description="Check-in date")
    check_out: date = Field(..., description="Check-out date")
    guests: Occupancy = Field(default_factory=Occupancy)
    guest: GuestContact
    special_requests: str = Field(default="", description="Free text requests")
    payment_intent_id: str | None = Field(
        default=None,
        description="Stripe PaymentIntent ID (pi_xxx) if the guest paid online",
    )
    status: BookingStatus = Field(default=BookingStatus.CONFIRMED)
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")

    def to_payload(self) -> dict:
        """Serialize for storage as a JSON document."""
        return self.model_dump(mode="json", by_alias=True)


class BookingRequest(CamelModel):
    """Inbound booking request.

    Every field is optional here so that BookingService can report all
    missing fields in a single ValidationError.
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
                    "adults": 2,
                    "children": 0,
                    "firstName": "Aroha",
                    "lastName": "Ngata",
                    "email": "aroha@example.com",
                    "phone": "+64211234567",
                    "specialRequests": "Late arrival",
                    "paymentIntentId": "pi_3ABC123DEF456",
                }
            ]
        },
    )

    accommodation_id: str | None = None
    check_in: str | None = None
    check_out: str | None = None
    adults: int | None = 2
    children: int | None = 0
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    special_requests: str | None = None
    payment_intent_id: str | None = None


class BookingSummary(CamelModel):
    """Short confirmation returned by the booking endpoint."""

    reference: str
    accommodation_id: str
    check_in: date
    check_out: date
    status: BookingStatus

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingSummary":
        return cls(
            reference=booking.reference,
            accommodation_id=booking.accommodation_id,
            check_in=booking.check_in,
            check_out=booking.check_out,
            status=booking.status,
        )
