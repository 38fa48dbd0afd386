"""Durable booking storage on PostgreSQL.

The store comes in two variants chosen once, at startup, by
connect_booking_store():

- ConnectedBookingStore: a live SQLAlchemy async engine passed its probe.
- UnavailableBookingStore: no database configured, or the probe failed.

Operations return faults as values instead of raising them:

    error = await store.write_booking(booking)
    booking, error = await store.read_booking(reference)

A fault at runtime never turns a connected store into an unavailable one;
callers decide how to degrade per call. Every database call is bounded by
the store timeout so one slow dependency cannot stall other requests.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    func,
    insert,
    select,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from lakeside.models import (
    Booking,
    StorageMode,
    StoreError,
    StoreReadError,
    StoreUnavailable,
    StoreWriteError,
)
from lakeside.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0

# Faults surfaced as StoreError values rather than raised
_DATABASE_FAULTS = (SQLAlchemyError, OSError, TimeoutError)

metadata = MetaData()

bookings_table = Table(
    "bookings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("booking_reference", String(20), unique=True, nullable=False),
    Column("data", JSON().with_variant(JSONB(), "postgresql"), nullable=False),
    Column("created_at", DateTime, server_default=func.now()),
)


class BookingStore(ABC):
    """Durable store capabilities shared by both variants."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the store was connected at startup."""

    @property
    def mode(self) -> StorageMode:
        return StorageMode.DATABASE if self.is_connected else StorageMode.MEMORY

    @abstractmethod
    async def write_booking(self, booking: Booking) -> StoreError | None:
        """Insert a booking keyed by its reference.

        Returns:
            None on success, otherwise the StoreError describing the fault
        """

    @abstractmethod
    async def read_booking(
        self, reference: str
    ) -> tuple[Booking | None, StoreError | None]:
        """Look up a booking by reference.

        Returns:
            (booking, None) on a hit, (None, None) when no row matches,
            (None, error) on a fault
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """Check that the store can serve queries right now."""

    async def close(self) -> None:
        """Release any held resources."""


class UnavailableBookingStore(BookingStore):
    """Stand-in used when no database connection could be established."""

    def __init__(self, reason: str) -> None:
        self.reason = reason

    @property
    def is_connected(self) -> bool:
        return False

    async def write_booking(self, booking: Booking) -> StoreError | None:
        return StoreUnavailable(self.reason)

    async def read_booking(
        self, reference: str
    ) -> tuple[Booking | None, StoreError | None]:
        return None, StoreUnavailable(self.reason)

    async def health_check(self) -> bool:
        return False


class ConnectedBookingStore(BookingStore):
    """Booking store backed by a PostgreSQL table.

    Each booking is one row: the reference in a unique column and the full
    camelCase payload in a JSONB column.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the store.

        Args:
            engine: SQLAlchemy async engine for the bookings database
            timeout: Seconds allowed for each database call
        """
        self.engine = engine
        self.timeout = timeout
        self._schema_ready = False
        self._schema_lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return True

    async def _ensure_schema(self) -> None:
        """Create the bookings table if it does not exist yet.

        The DDL commits in its own transaction, and the table is only marked
        ready once that commit succeeds.
        """
        if self._schema_ready:
            return
        async with self._schema_lock:
            if not self._schema_ready:
                async with self.engine.begin() as conn:
                    await conn.run_sync(metadata.create_all)
                self._schema_ready = True

    async def _select_one(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def probe(self) -> None:
        """Run a trivial query, raising on any connectivity fault or timeout."""
        await asyncio.wait_for(self._select_one(), self.timeout)

    async def _insert(self, booking: Booking) -> None:
        await self._ensure_schema()
        async with self.engine.begin() as conn:
            await conn.execute(
                insert(bookings_table).values(
                    booking_reference=booking.reference,
                    data=booking.to_payload(),
                )
            )

    async def _select(self, reference: str) -> Any:
        await self._ensure_schema()
        async with self.engine.begin() as conn:
            result = await conn.execute(
                select(bookings_table.c.data).where(
                    bookings_table.c.booking_reference == reference
                )
            )
            row = result.first()
            return row.data if row is not None else None

    async def write_booking(self, booking: Booking) -> StoreError | None:
        try:
            await asyncio.wait_for(self._insert(booking), self.timeout)
        except _DATABASE_FAULTS as e:
            return StoreWriteError(f"{type(e).__name__}: {e}")

        logger.info("Booking saved to database: %s", booking.reference)
        return None

    async def read_booking(
        self, reference: str
    ) -> tuple[Booking | None, StoreError | None]:
        try:
            payload = await asyncio.wait_for(self._select(reference), self.timeout)
            if payload is None:
                return None, None
            return Booking.model_validate(payload), None
        except (*_DATABASE_FAULTS, PydanticValidationError) as e:
            return None, StoreReadError(f"{type(e).__name__}: {e}")

    async def health_check(self) -> bool:
        try:
            await self.probe()
        except _DATABASE_FAULTS as e:
            logger.warning("Database health check failed: %s", e)
            return False
        return True

    async def close(self) -> None:
        await self.engine.dispose()


async def connect_booking_store(
    database_url: str | None,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ssl: bool = False,
    engine_factory: Callable[..., AsyncEngine] = create_async_engine,
) -> BookingStore:
    """Connect to the durable store, demoting to unavailable on any failure.

    Never raises: a missing URL, a bad URL or a failed probe all produce an
    UnavailableBookingStore and a log line explaining why.

    Args:
        database_url: SQLAlchemy async URL (postgresql+asyncpg://...) or None
        timeout: Seconds allowed for the probe and for each later call
        ssl: Require TLS on database connections
        engine_factory: Engine constructor, replaceable in tests

    Returns:
        The store variant to use for the process lifetime
    """
    if not database_url:
        logger.info("No DATABASE_URL configured, using memory storage")
        return UnavailableBookingStore("database not configured")

    connect_args = {"ssl": "require"} if ssl else {}
    try:
        engine = engine_factory(
            database_url,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
    except (SQLAlchemyError, ValueError, ImportError) as e:
        logger.error("Database initialization failed, using memory storage: %s", e)
        return UnavailableBookingStore(f"initialization failed: {e}")

    store = ConnectedBookingStore(engine, timeout=timeout)
    try:
        await store.probe()
    except _DATABASE_FAULTS as e:
        logger.error("Database connection failed, using memory storage: %s", e)
        await engine.dispose()
        return UnavailableBookingStore(f"connection failed: {e}")

    logger.info("Database connected successfully")
    return store
