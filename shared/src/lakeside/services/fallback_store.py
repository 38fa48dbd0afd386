"""In-memory booking store used when the database cannot take a write."""

import threading

from lakeside.models import Booking


class InMemoryBookingStore:
    """Process-local mapping of booking reference to Booking.

    Contents live as long as the instance and are lost on restart. All
    access is serialized by a lock, so concurrent requests may share one
    instance. Neither operation can fail.
    """

    def __init__(self) -> None:
        self._bookings: dict[str, Booking] = {}
        self._lock = threading.Lock()

    def put(self, reference: str, booking: Booking) -> None:
        """Store a booking, replacing any booking with the same reference."""
        with self._lock:
            self._bookings[reference] = booking

    def get(self, reference: str) -> Booking | None:
        """Get a booking by reference, or None if absent."""
        with self._lock:
            return self._bookings.get(reference)

    def __contains__(self, reference: object) -> bool:
        with self._lock:
            return reference in self._bookings

    def __len__(self) -> int:
        with self._lock:
            return len(self._bookings)
