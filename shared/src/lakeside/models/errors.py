"""Standard error codes and exceptions for the booking backend.

Client-facing failures raise a BookingError subclass carrying an ErrorCode.
Storage faults are a separate family (StoreError) that the durable store
returns as values; the booking service inspects them and degrades to the
fallback store instead of raising.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Error codes returned in ErrorResponse bodies."""

    # Booking error codes (ERR_001-ERR_004)
    VALIDATION_FAILED = "ERR_001"
    INVALID_DATE_RANGE = "ERR_002"
    BOOKING_NOT_FOUND = "ERR_003"
    INVALID_CONTACT = "ERR_004"

    # Payment error codes (ERR_PAY_001-ERR_PAY_002)
    PAYMENT_NOT_CONFIGURED = "ERR_PAY_001"
    PAYMENT_FAILED = "ERR_PAY_002"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Missing required fields",
    ErrorCode.INVALID_DATE_RANGE: "Check-out date must be after check-in date",
    ErrorCode.BOOKING_NOT_FOUND: "Booking not found",
    ErrorCode.INVALID_CONTACT: "Invalid contact form submission",
    ErrorCode.PAYMENT_NOT_CONFIGURED: "Payment processing not configured",
    ErrorCode.PAYMENT_FAILED: "Unable to create payment intent",
}

# Recovery suggestions for API clients
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Provide the fields listed in details and resubmit",
    ErrorCode.INVALID_DATE_RANGE: "Choose a check-out date after the check-in date",
    ErrorCode.BOOKING_NOT_FOUND: "Check the booking reference and try again",
    ErrorCode.INVALID_CONTACT: "Provide name, a valid email and a message",
    ErrorCode.PAYMENT_NOT_CONFIGURED: "Contact the property directly to book",
    ErrorCode.PAYMENT_FAILED: "Try again or contact support",
}


class ErrorResponse(BaseModel):
    """Standard error body for every failed API call."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, Any]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, Any]] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            An ErrorResponse with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class BookingError(Exception):
    """Exception raised by booking operations.

    Converted to an ErrorResponse by the API exception handlers.
    """

    code: ErrorCode = ErrorCode.VALIDATION_FAILED

    def __init__(
        self,
        code: Optional[ErrorCode] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if code is not None:
            self.code = code
        self.message = ERROR_MESSAGES[self.code]
        self.recovery = ERROR_RECOVERY[self.code]
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to an ErrorResponse."""
        return ErrorResponse(
            error_code=self.code,
            message=self.message,
            recovery=self.recovery,
            details=self.details,
        )


class ValidationError(BookingError):
    """Booking request is missing required fields or has malformed values.

    Lists every offending field, not just the first one found.
    """

    code = ErrorCode.VALIDATION_FAILED

    def __init__(
        self,
        missing: Optional[list[str]] = None,
        invalid: Optional[list[str]] = None,
    ):
        self.missing = list(missing or [])
        self.invalid = list(invalid or [])
        super().__init__(details={"missing": self.missing, "invalid": self.invalid})
        if not self.missing and self.invalid:
            self.message = "Invalid field values"


class InvalidDateRange(BookingError):
    """Check-out is on or before check-in."""

    code = ErrorCode.INVALID_DATE_RANGE


class BookingNotFound(BookingError):
    """No booking with the reference exists in either store."""

    code = ErrorCode.BOOKING_NOT_FOUND

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(details={"reference": reference})


class PaymentNotConfigured(BookingError):
    """No Stripe secret key is available."""

    code = ErrorCode.PAYMENT_NOT_CONFIGURED


class PaymentFailed(BookingError):
    """The payment provider rejected or failed the request."""

    code = ErrorCode.PAYMENT_FAILED


class StoreError(Exception):
    """Base class for durable store faults.

    Returned by the durable store as values rather than raised.
    """


class StoreUnavailable(StoreError):
    """The durable store was never connected."""


class StoreWriteError(StoreError):
    """A write against the durable store failed."""


class StoreReadError(StoreError):
    """A read against the durable store failed."""
