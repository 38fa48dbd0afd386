"""Enumeration types for Lakeside data models."""

from enum import Enum


class BookingStatus(str, Enum):
    """Status of a booking.

    Only CONFIRMED is produced; bookings are never updated or cancelled here.
    """

    CONFIRMED = "confirmed"


class PriceSource(str, Enum):
    """Where displayed accommodation rates came from."""

    LIVE = "live"
    CONFIGURED = "configured"


class StorageMode(str, Enum):
    """Primary path used for booking persistence."""

    DATABASE = "database"
    MEMORY = "memory"
