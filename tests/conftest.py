"""Pytest configuration and fixtures for Lakeside booking backend tests.

This module provides reusable fixtures for testing:
- Environment isolation (no real database, Stripe or SES by default)
- Sample booking data in wire (camelCase) form
- Fake durable stores for the connected, failing and unavailable paths
- A TestClient that runs the application lifespan
"""

import os
from datetime import UTC, date, datetime
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient

from lakeside.models import (
    Booking,
    BookingRequest,
    BookingStatus,
    GuestContact,
    Occupancy,
    StoreError,
    StoreReadError,
    StoreWriteError,
)
from lakeside.services import (
    BookingService,
    BookingStore,
    InMemoryBookingStore,
    UnavailableBookingStore,
)

# === Environment Setup ===

os.environ.setdefault("AWS_DEFAULT_REGION", "ap-southeast-2")

# Only set fake credentials for moto if no real credentials are present
if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

# Settings read by lakeside.config that must not leak in from the shell
SETTINGS_ENV_VARS = (
    "DATABASE_URL",
    "DATABASE_SSL",
    "STRIPE_SECRET_KEY",
    "STRIPE_SECRET_KEY_PARAMETER",
    "UPLISTING_API_KEY",
    "UPLISTING_API_URL",
    "NOTIFICATION_SENDER",
    "NOTIFICATION_RECIPIENT",
    "FRONTEND_URL",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear configuration env vars and cached services around each test."""
    from lakeside_api.dependencies import reset_services

    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    reset_services()
    yield
    reset_services()


@pytest.fixture
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mocked AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-southeast-2")


# === Fake Durable Stores ===


class DictBookingStore(BookingStore):
    """Connected durable store kept in a dict."""

    def __init__(self) -> None:
        self.rows: dict[str, dict[str, Any]] = {}
        self.closed = False

    @property
    def is_connected(self) -> bool:
        return True

    async def write_booking(self, booking: Booking) -> StoreError | None:
        self.rows[booking.reference] = booking.to_payload()
        return None

    async def read_booking(
        self, reference: str
    ) -> tuple[Booking | None, StoreError | None]:
        payload = self.rows.get(reference)
        if payload is None:
            return None, None
        return Booking.model_validate(payload), None

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True


class FailingBookingStore(BookingStore):
    """Connected durable store whose every call reports a fault."""

    def __init__(self) -> None:
        self.write_attempts = 0
        self.read_attempts = 0

    @property
    def is_connected(self) -> bool:
        return True

    async def write_booking(self, booking: Booking) -> StoreError | None:
        self.write_attempts += 1
        return StoreWriteError("connection reset by peer")

    async def read_booking(
        self, reference: str
    ) -> tuple[Booking | None, StoreError | None]:
        self.read_attempts += 1
        return None, StoreReadError("connection reset by peer")

    async def health_check(self) -> bool:
        return False


@pytest.fixture
def dict_store() -> DictBookingStore:
    return DictBookingStore()


@pytest.fixture
def failing_store() -> FailingBookingStore:
    return FailingBookingStore()


@pytest.fixture
def unavailable_store() -> UnavailableBookingStore:
    return UnavailableBookingStore("database not configured")


@pytest.fixture
def fallback_store() -> InMemoryBookingStore:
    return InMemoryBookingStore()


FIXED_NOW = datetime(2024, 5, 20, 9, 30, tzinfo=UTC)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_service(fallback_store: InMemoryBookingStore):
    """Factory building a BookingService with a fixed clock.

    The fallback store is the shared fallback_store fixture.
    """

    def _make(durable: BookingStore) -> BookingService:
        return BookingService(
            durable=durable,
            fallback=fallback_store,
            clock=lambda: FIXED_NOW,
        )

    return _make


# === Sample Data Fixtures ===


@pytest.fixture
def booking_payload() -> dict[str, Any]:
    """Complete booking request body as sent by the website."""
    return {
        "accommodationId": "cottage",
        "checkIn": "2024-06-01",
        "checkOut": "2024-06-04",
        "adults": 2,
        "children": 1,
        "firstName": "Aroha",
        "lastName": "Ngata",
        "email": "aroha@example.com",
        "phone": "+64211234567",
        "specialRequests": "Late arrival",
        "paymentIntentId": "pi_3ABC123DEF456",
    }


@pytest.fixture
def booking_request(booking_payload: dict[str, Any]) -> BookingRequest:
    return BookingRequest.model_validate(booking_payload)


@pytest.fixture
def sample_booking() -> Booking:
    """A confirmed booking as stored."""
    return Booking(
        reference="LR482913K7Q",
        accommodation_id="pinot",
        check_in=date(2024, 7, 10),
        check_out=date(2024, 7, 12),
        guests=Occupancy(adults=2, children=0),
        guest=GuestContact(
            first_name="Tama",
            last_name="Wiremu",
            email="tama@example.com",
            phone="021 555 0101",
        ),
        special_requests="",
        payment_intent_id="pi_123",
        status=BookingStatus.CONFIRMED,
        created_at=FIXED_NOW,
    )


# === API Fixtures ===


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """TestClient with the lifespan running (memory storage, no database)."""
    from lakeside_api.main import app

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
