"""API models for booking endpoints."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lakeside.models import Booking, BookingSummary
from lakeside.models.booking import CamelModel


class BookingCreatedResponse(CamelModel):
    """Confirmation returned after a booking is processed."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "success": True,
                    "bookingReference": "LR482913K7Q",
                    "booking": {
                        "reference": "LR482913K7Q",
                        "accommodationId": "cottage",
                        "checkIn": "2024-06-01",
                        "checkOut": "2024-06-04",
                        "status": "confirmed",
                    },
                }
            ]
        },
    )

    success: bool = True
    booking_reference: str = Field(..., description="New booking reference")
    booking: BookingSummary


class BookingResponse(BaseModel):
    """Full booking record wrapper."""

    booking: Booking


class LegacyBookingRequest(CamelModel):
    """Body accepted by the legacy booking endpoint."""

    accommodation_id: str | None = None
    check_in: str | None = None
    check_out: str | None = None


class LegacyBookingResponse(BaseModel):
    """Acknowledgement pointing clients at the current booking flow."""

    success: bool = True
    message: str
    endpoints: dict[str, str]
