"""Booking endpoints.

Booking confirmation runs after the guest has paid, so creation never fails
because of storage: the service falls back to in-memory storage when the
database is unavailable.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Path, status

from lakeside.models import BookingRequest, BookingSummary, ValidationError
from lakeside.services import BookingService, NotificationService
from lakeside_api.dependencies import get_booking_service, get_notification_service
from lakeside_api.models.bookings import (
    BookingCreatedResponse,
    BookingResponse,
    LegacyBookingRequest,
    LegacyBookingResponse,
)

router = APIRouter(tags=["bookings"])


@router.post(
    "/process-booking",
    summary="Confirm a booking",
    description="""
Create a confirmed booking after payment.

**Required fields:** accommodationId, checkIn, checkOut, firstName,
lastName, email, phone.

**Notes:**
- Every missing field is listed in `details.missing` in one response
- A confirmation email is sent in the background when SES is configured
""",
    status_code=status.HTTP_201_CREATED,
    response_model=BookingCreatedResponse,
    responses={
        400: {"description": "Missing or invalid fields, or invalid date range"},
    },
)
async def process_booking(
    request: BookingRequest,
    background_tasks: BackgroundTasks,
    service: BookingService = Depends(get_booking_service),
    notifications: NotificationService = Depends(get_notification_service),
) -> BookingCreatedResponse:
    """Validate, persist and confirm a booking."""
    booking = await service.create_booking(request)
    background_tasks.add_task(notifications.send_booking_confirmation, booking)
    return BookingCreatedResponse(
        booking_reference=booking.reference,
        booking=BookingSummary.from_booking(booking),
    )


@router.get(
    "/bookings/{reference}",
    summary="Get a booking",
    description="Look up a booking by reference in whichever store holds it.",
    response_model=BookingResponse,
    responses={
        404: {"description": "Booking not found"},
    },
)
async def get_booking(
    reference: str = Path(..., min_length=1, examples=["LR482913K7Q"]),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """Get booking details by reference."""
    booking = await service.get_booking(reference)
    return BookingResponse(booking=booking)


@router.post(
    "/bookings",
    summary="Legacy booking request",
    description="""
Accept a minimal booking enquiry and point the client at the current flow.

Nothing is persisted. Use `/api/create-payment-intent` followed by
`/api/process-booking` to book.
""",
    response_model=LegacyBookingResponse,
    deprecated=True,
)
async def legacy_booking(request: LegacyBookingRequest) -> LegacyBookingResponse:
    """Acknowledge a legacy booking request."""
    missing = [
        name
        for name, value in (
            ("accommodationId", request.accommodation_id),
            ("checkIn", request.check_in),
            ("checkOut", request.check_out),
        )
        if not value
    ]
    if missing:
        raise ValidationError(missing=missing)

    return LegacyBookingResponse(
        message="Booking request received. Use /api/process-booking for complete booking flow.",
        endpoints={
            "createPayment": "/api/create-payment-intent",
            "processBooking": "/api/process-booking",
        },
    )
