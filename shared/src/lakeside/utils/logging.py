"""Logging setup and request correlation for the booking backend.

Every record is stamped with ``correlation_id``: the X-Correlation-ID of the
request being served, or ``no-correlation-id`` outside one. Booking and
storage events go through log_booking_operation() so fallbacks can be
grepped by operation name.

Usage:
    from lakeside.utils.logging import get_logger, log_booking_operation

    logger = get_logger(__name__)
    log_booking_operation(logger, "durable_write", reference=ref, error=str(err))
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any

NO_CORRELATION_ID = "no-correlation-id"

LOG_FORMAT = "[%(correlation_id)s] %(asctime)s %(levelname)s %(name)s: %(message)s"

# Per request under asyncio; copied into threadpool calls by Starlette
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind a correlation ID to the current context, generating one if needed.

    Returns:
        The bound correlation ID
    """
    value = correlation_id or uuid.uuid4().hex
    _correlation_id.set(value)
    return value


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Stamps each record with the active correlation ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True


class StructuredFormatter(logging.Formatter):
    """Formatter for LOG_FORMAT that also accepts records no filter has seen."""

    def __init__(self, fmt: str = LOG_FORMAT, datefmt: str | None = None) -> None:
        super().__init__(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return super().format(record)


def configure_logging(level: str = "INFO") -> None:
    """Send root logging to stderr through StructuredFormatter.

    Repeated calls only adjust the level.

    Args:
        level: Log level name (e.g. "INFO", "DEBUG")
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    if any(isinstance(h.formatter, StructuredFormatter) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger whose records carry the correlation ID."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())
    return logger


def log_booking_operation(
    logger: logging.Logger,
    operation: str,
    *,
    reference: str | None = None,
    accommodation_id: str | None = None,
    storage: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log one booking or storage event as ``operation | key=value`` pairs.

    Logged at ERROR when error is given, INFO otherwise. The same fields are
    attached to the record as attributes.

    Args:
        logger: Logger to write to
        operation: Event name ("create_booking", "durable_write", ...)
        reference: Booking reference
        accommodation_id: Accommodation unit ID
        storage: Store that took the booking ("database" or "memory")
        error: Fault description; switches the level to ERROR
        **extra: Further fields appended after the named ones
    """
    fields = {
        "reference": reference,
        "accommodation_id": accommodation_id,
        "storage": storage,
        "error": error,
        **extra,
    }
    context = {key: value for key, value in fields.items() if value is not None}

    message = " | ".join(
        [f"Booking operation: {operation}"]
        + [f"{key}={value}" for key, value in context.items()]
    )
    logger.log(
        logging.ERROR if error else logging.INFO,
        message,
        extra={"operation": operation, **context},
    )
