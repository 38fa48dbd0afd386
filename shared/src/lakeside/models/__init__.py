"""Pydantic models for Lakeside booking data entities."""

from .accommodation import Accommodation
from .booking import (
    EMAIL_PATTERN,
    Booking,
    BookingRequest,
    BookingSummary,
    GuestContact,
    Occupancy,
)
from .contact import ContactMessage
from .enums import BookingStatus, PriceSource, StorageMode
from .errors import (
    ERROR_MESSAGES,
    ERROR_RECOVERY,
    BookingError,
    BookingNotFound,
    ErrorCode,
    ErrorResponse,
    InvalidDateRange,
    PaymentFailed,
    PaymentNotConfigured,
    StoreError,
    StoreReadError,
    StoreUnavailable,
    StoreWriteError,
    ValidationError,
)
from .pricing import PriceQuote

__all__ = [
    # Enums
    "BookingStatus",
    "PriceSource",
    "StorageMode",
    # Booking
    "EMAIL_PATTERN",
    "Booking",
    "BookingRequest",
    "BookingSummary",
    "GuestContact",
    "Occupancy",
    # Pricing
    "PriceQuote",
    # Listing / contact
    "Accommodation",
    "ContactMessage",
    # Errors
    "BookingError",
    "BookingNotFound",
    "ErrorCode",
    "ErrorResponse",
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "InvalidDateRange",
    "PaymentFailed",
    "PaymentNotConfigured",
    "StoreError",
    "StoreReadError",
    "StoreUnavailable",
    "StoreWriteError",
    "ValidationError",
]
