"""Unit tests for the durable booking store.

The SQLAlchemy engine is mocked; tests/integration covers a real
PostgreSQL database.
"""

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import OperationalError

from lakeside.models import (
    StorageMode,
    StoreReadError,
    StoreUnavailable,
    StoreWriteError,
)
from lakeside.services import (
    ConnectedBookingStore,
    UnavailableBookingStore,
    connect_booking_store,
)


def db_error(message: str = "connection refused") -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception(message))


def make_engine(row_data: Any = None) -> tuple[MagicMock, AsyncMock]:
    """Build a mocked AsyncEngine whose connections return row_data."""
    result = MagicMock()
    result.first.return_value = None if row_data is None else MagicMock(data=row_data)

    conn = AsyncMock()
    conn.execute.return_value = result

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=conn)
    context.__aexit__ = AsyncMock(return_value=False)

    engine = MagicMock()
    engine.begin.return_value = context
    engine.connect.return_value = context
    engine.dispose = AsyncMock()
    return engine, conn


# === Unavailable Store ===


class TestUnavailableBookingStore:
    """Tests for the never-connected variant."""

    async def test_write_reports_unavailable(self, sample_booking):
        store = UnavailableBookingStore("database not configured")

        error = await store.write_booking(sample_booking)

        assert isinstance(error, StoreUnavailable)
        assert "database not configured" in str(error)

    async def test_read_reports_unavailable(self):
        store = UnavailableBookingStore("database not configured")

        booking, error = await store.read_booking("LR482913K7Q")

        assert booking is None
        assert isinstance(error, StoreUnavailable)

    async def test_mode_and_health(self):
        store = UnavailableBookingStore("connection failed")

        assert store.is_connected is False
        assert store.mode == StorageMode.MEMORY
        assert await store.health_check() is False


# === Connected Store ===


class TestConnectedBookingStoreWrite:
    """Tests for write_booking()."""

    async def test_write_success_returns_none(self, sample_booking):
        engine, conn = make_engine()
        store = ConnectedBookingStore(engine)

        error = await store.write_booking(sample_booking)

        assert error is None
        conn.execute.assert_awaited_once()

    async def test_schema_created_once(self, sample_booking):
        engine, conn = make_engine()
        store = ConnectedBookingStore(engine)

        await store.write_booking(sample_booking)
        await store.write_booking(sample_booking.model_copy(update={"reference": "LR1"}))

        assert conn.run_sync.await_count == 1

    async def test_schema_committed_before_insert(self, sample_booking):
        engine, conn = make_engine()
        store = ConnectedBookingStore(engine)

        await store.write_booking(sample_booking)

        # One transaction for the DDL, a second one for the insert
        assert engine.begin.call_count == 2

    async def test_insert_fault_keeps_committed_schema(self, sample_booking):
        engine, conn = make_engine()
        conn.execute.side_effect = [db_error(), MagicMock()]
        store = ConnectedBookingStore(engine)

        first = await store.write_booking(sample_booking)
        second = await store.write_booking(sample_booking)

        assert isinstance(first, StoreWriteError)
        assert second is None
        assert conn.run_sync.await_count == 1
        assert conn.execute.await_count == 2

    async def test_failed_schema_creation_retried(self, sample_booking):
        engine, conn = make_engine()
        conn.run_sync.side_effect = [db_error(), None]
        store = ConnectedBookingStore(engine)

        first = await store.write_booking(sample_booking)
        second = await store.write_booking(sample_booking)

        assert isinstance(first, StoreWriteError)
        assert second is None
        assert conn.run_sync.await_count == 2
        conn.execute.assert_awaited_once()

    async def test_write_fault_returned_not_raised(self, sample_booking):
        engine, conn = make_engine()
        conn.execute.side_effect = db_error()
        store = ConnectedBookingStore(engine)

        error = await store.write_booking(sample_booking)

        assert isinstance(error, StoreWriteError)
        assert "OperationalError" in str(error)

    async def test_write_fault_does_not_demote_store(self, sample_booking):
        engine, conn = make_engine()
        conn.execute.side_effect = db_error()
        store = ConnectedBookingStore(engine)

        await store.write_booking(sample_booking)

        assert store.is_connected is True
        assert store.mode == StorageMode.DATABASE

    async def test_write_timeout(self, sample_booking):
        engine, conn = make_engine()

        async def slow_execute(*args, **kwargs):
            await asyncio.sleep(1)

        conn.execute.side_effect = slow_execute
        store = ConnectedBookingStore(engine, timeout=0.01)

        error = await store.write_booking(sample_booking)

        assert isinstance(error, StoreWriteError)
        assert "TimeoutError" in str(error)


class TestConnectedBookingStoreRead:
    """Tests for read_booking()."""

    async def test_read_hit(self, sample_booking):
        engine, _ = make_engine(row_data=sample_booking.to_payload())
        store = ConnectedBookingStore(engine)

        booking, error = await store.read_booking(sample_booking.reference)

        assert error is None
        assert booking.to_payload() == sample_booking.to_payload()

    async def test_read_miss(self):
        engine, _ = make_engine(row_data=None)
        store = ConnectedBookingStore(engine)

        booking, error = await store.read_booking("LR000000AAA")

        assert booking is None
        assert error is None

    async def test_read_fault(self):
        engine, conn = make_engine()
        conn.execute.side_effect = db_error()
        store = ConnectedBookingStore(engine)

        booking, error = await store.read_booking("LR482913K7Q")

        assert booking is None
        assert isinstance(error, StoreReadError)

    async def test_corrupt_payload_is_read_error(self):
        engine, _ = make_engine(row_data={"reference": "LR482913K7Q"})
        store = ConnectedBookingStore(engine)

        booking, error = await store.read_booking("LR482913K7Q")

        assert booking is None
        assert isinstance(error, StoreReadError)


class TestConnectedBookingStoreLifecycle:
    """Tests for health_check() and close()."""

    async def test_health_check_ok(self):
        engine, _ = make_engine()
        store = ConnectedBookingStore(engine)

        assert await store.health_check() is True

    async def test_health_check_fault(self):
        engine, conn = make_engine()
        conn.execute.side_effect = OSError("network unreachable")
        store = ConnectedBookingStore(engine)

        assert await store.health_check() is False
        assert store.is_connected is True

    async def test_close_disposes_engine(self):
        engine, _ = make_engine()
        store = ConnectedBookingStore(engine)

        await store.close()

        engine.dispose.assert_awaited_once()


# === connect_booking_store ===


class TestConnectBookingStore:
    """Tests for choosing the store variant at startup."""

    async def test_no_url_is_unavailable(self):
        store = await connect_booking_store(None)

        assert isinstance(store, UnavailableBookingStore)
        assert store.reason == "database not configured"

    async def test_successful_probe_is_connected(self):
        engine, _ = make_engine()
        factory = MagicMock(return_value=engine)

        store = await connect_booking_store(
            "postgresql+asyncpg://u:p@db/lakeside", timeout=2.0, engine_factory=factory
        )

        assert isinstance(store, ConnectedBookingStore)
        assert store.timeout == 2.0
        factory.assert_called_once_with(
            "postgresql+asyncpg://u:p@db/lakeside",
            pool_pre_ping=True,
            connect_args={},
        )

    async def test_ssl_requested(self):
        engine, _ = make_engine()
        factory = MagicMock(return_value=engine)

        await connect_booking_store(
            "postgresql+asyncpg://u:p@db/lakeside", ssl=True, engine_factory=factory
        )

        assert factory.call_args.kwargs["connect_args"] == {"ssl": "require"}

    async def test_failed_probe_is_unavailable(self):
        engine, conn = make_engine()
        conn.execute.side_effect = db_error()
        factory = MagicMock(return_value=engine)

        store = await connect_booking_store(
            "postgresql+asyncpg://u:p@db/lakeside", engine_factory=factory
        )

        assert isinstance(store, UnavailableBookingStore)
        assert store.reason.startswith("connection failed")
        engine.dispose.assert_awaited_once()

    async def test_probe_timeout_is_unavailable(self):
        engine, conn = make_engine()

        async def hang(*args, **kwargs):
            await asyncio.sleep(1)

        conn.execute.side_effect = hang
        factory = MagicMock(return_value=engine)

        store = await connect_booking_store(
            "postgresql+asyncpg://u:p@db/lakeside", timeout=0.01, engine_factory=factory
        )

        assert isinstance(store, UnavailableBookingStore)

    async def test_engine_factory_error_is_unavailable(self):
        factory = MagicMock(side_effect=ValueError("bad url"))

        store = await connect_booking_store("nonsense", engine_factory=factory)

        assert isinstance(store, UnavailableBookingStore)
        assert store.reason.startswith("initialization failed")

    async def test_unparseable_url_is_unavailable(self):
        """A malformed URL never crashes startup."""
        store = await connect_booking_store("not a database url")

        assert isinstance(store, UnavailableBookingStore)
