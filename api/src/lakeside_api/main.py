"""FastAPI application entry point.

The lifespan connects the durable booking store once at startup. A failed
connection is logged and the app starts anyway with bookings held in
memory.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any, AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from lakeside import __version__
from lakeside.config import get_settings
from lakeside.utils.logging import configure_logging
from lakeside_api.dependencies import build_booking_service
from lakeside_api.exceptions import register_exception_handlers
from lakeside_api.middleware import CorrelationIdMiddleware
from lakeside_api.routes import (
    accommodations_router,
    bookings_router,
    contact_router,
    health_router,
    payments_router,
    pricing_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(settings.log_level)

    app.state.started_at = time.monotonic()
    app.state.booking_service = await build_booking_service(settings)
    logger.info(
        "Lakeside booking API started (%s), booking storage: %s",
        settings.environment,
        app.state.booking_service.storage_mode.value,
    )

    yield

    await app.state.booking_service.durable.close()
    logger.info("Lakeside booking API stopped")


app = FastAPI(
    title="Lakeside Retreat Booking API",
    description="REST API for pricing, payments and confirmed bookings",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_settings().frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)

app.include_router(health_router, prefix="/api")
app.include_router(accommodations_router, prefix="/api")
app.include_router(pricing_router, prefix="/api")
app.include_router(payments_router, prefix="/api")
app.include_router(bookings_router, prefix="/api")
app.include_router(contact_router, prefix="/api")


@app.get("/api/ping")
async def ping() -> dict[str, Any]:
    """Liveness check that does not touch any service."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "lakeside-booking-api",
    }


# Lambda handler; lifespan must run so the booking store is connected
handler = Mangum(app, lifespan="auto")


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = False) -> None:
    """Run the API with uvicorn.

    Args:
        host: Host to bind to
        port: Port to listen on
        reload: Enable hot reload for development
    """
    import uvicorn

    if reload:
        uvicorn.run(
            "lakeside_api.main:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["api/src", "shared/src"],
        )
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
