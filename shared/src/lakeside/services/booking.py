"""Booking service for confirmed bookings.

Writes go to the durable store first and fall back to the in-memory store
on any storage fault, so a guest who has already paid is never refused a
confirmation because the database is degraded. Reads check the durable
store first and then the fallback, so a booking is found whichever path
stored it.
"""

import datetime as dt
from typing import Callable

from lakeside.models import (
    EMAIL_PATTERN,
    Booking,
    BookingNotFound,
    BookingRequest,
    BookingStatus,
    GuestContact,
    InvalidDateRange,
    Occupancy,
    StorageMode,
    ValidationError,
)
from lakeside.utils.logging import get_logger, log_booking_operation

from .booking_store import BookingStore
from .fallback_store import InMemoryBookingStore
from .reference import ReferenceGenerator

logger = get_logger(__name__)

# (python attribute, wire name) in the order they are reported
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("accommodation_id", "accommodationId"),
    ("check_in", "checkIn"),
    ("check_out", "checkOut"),
    ("first_name", "firstName"),
    ("last_name", "lastName"),
    ("email", "email"),
    ("phone", "phone"),
)


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


def _parse_date(value: str) -> dt.date | None:
    """Parse an ISO date, accepting a full ISO timestamp as well."""
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return dt.datetime.fromisoformat(value).date()
    except ValueError:
        return None


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


class BookingService:
    """Service for creating and retrieving bookings.

    The only writer of bookings. Both stores are injected and owned by the
    caller for the life of the process.
    """

    def __init__(
        self,
        durable: BookingStore,
        fallback: InMemoryBookingStore,
        reference_factory: Callable[[], str] | None = None,
        clock: Callable[[], dt.datetime] = _utcnow,
    ) -> None:
        """Initialize booking service.

        Args:
            durable: Durable store variant chosen at startup
            fallback: In-memory store used when durable writes fail
            reference_factory: Booking reference generator
            clock: Source of creation timestamps
        """
        self.durable = durable
        self.fallback = fallback
        self.reference_factory = reference_factory or ReferenceGenerator()
        self.clock = clock

    @property
    def storage_mode(self) -> StorageMode:
        """Primary storage path for new bookings."""
        return self.durable.mode

    def validate_request(
        self, request: BookingRequest
    ) -> tuple[dt.date, dt.date, GuestContact, Occupancy]:
        """Validate a booking request.

        Args:
            request: Inbound booking request

        Returns:
            Tuple of (check_in, check_out, guest contact, occupancy)

        Raises:
            ValidationError: Listing every missing field, or every malformed one
            InvalidDateRange: If check-out is not after check-in
        """
        missing = [
            wire_name
            for attr, wire_name in REQUIRED_FIELDS
            if _is_missing(getattr(request, attr))
        ]
        if missing:
            raise ValidationError(missing=missing)

        invalid: list[str] = []
        check_in = _parse_date(request.check_in)
        if check_in is None:
            invalid.append("checkIn")
        check_out = _parse_date(request.check_out)
        if check_out is None:
            invalid.append("checkOut")
        if not EMAIL_PATTERN.match(request.email.strip()):
            invalid.append("email")

        adults = 2 if request.adults is None else request.adults
        children = 0 if request.children is None else request.children
        if adults < 1:
            invalid.append("adults")
        if children < 0:
            invalid.append("children")

        if invalid:
            raise ValidationError(invalid=invalid)

        if check_out <= check_in:
            raise InvalidDateRange(
                details={
                    "check_in": check_in.isoformat(),
                    "check_out": check_out.isoformat(),
                }
            )

        guest = GuestContact(
            first_name=request.first_name.strip(),
            last_name=request.last_name.strip(),
            email=request.email.strip(),
            phone=request.phone.strip(),
        )
        return check_in, check_out, guest, Occupancy(adults=adults, children=children)

    async def create_booking(self, request: BookingRequest) -> Booking:
        """Create and persist a confirmed booking.

        Storage faults are logged and absorbed by the fallback store; they
        never fail the call.

        Args:
            request: Inbound booking request

        Returns:
            The created Booking

        Raises:
            ValidationError: If required fields are missing or malformed
            InvalidDateRange: If check-out is not after check-in
        """
        check_in, check_out, guest, occupancy = self.validate_request(request)

        booking = Booking(
            reference=self.reference_factory(),
            accommodation_id=request.accommodation_id.strip(),
            check_in=check_in,
            check_out=check_out,
            guests=occupancy,
            guest=guest,
            special_requests=request.special_requests or "",
            payment_intent_id=request.payment_intent_id or None,
            status=BookingStatus.CONFIRMED,
            created_at=self.clock(),
        )

        storage = StorageMode.DATABASE
        error = await self.durable.write_booking(booking)
        if error is not None:
            log_booking_operation(
                logger,
                "durable_write",
                reference=booking.reference,
                error=f"{type(error).__name__}: {error}",
                fallback="memory",
            )
            self.fallback.put(booking.reference, booking)
            storage = StorageMode.MEMORY

        log_booking_operation(
            logger,
            "create_booking",
            reference=booking.reference,
            accommodation_id=booking.accommodation_id,
            storage=storage.value,
            email=booking.guest.email,
        )
        return booking

    async def get_booking(self, reference: str) -> Booking:
        """Get a booking by reference from whichever store holds it.

        Args:
            reference: Booking reference

        Returns:
            The stored Booking

        Raises:
            BookingNotFound: If neither store has the reference
        """
        if self.durable.is_connected:
            booking, error = await self.durable.read_booking(reference)
            if booking is not None:
                return booking
            if error is not None:
                log_booking_operation(
                    logger,
                    "durable_read",
                    reference=reference,
                    error=f"{type(error).__name__}: {error}",
                )

        booking = self.fallback.get(reference)
        if booking is None:
            raise BookingNotFound(reference)
        return booking
