"""Health check endpoint."""

import time
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, Request

from lakeside import __version__
from lakeside.services import BookingService
from lakeside_api.dependencies import get_booking_service

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Service health",
    description="""
Report service health, uptime and the active booking storage path.

**Notes:**
- `storage` is `database` when bookings are written to PostgreSQL,
  `memory` when the durable store is unavailable
- Storage degradation does not make the service unhealthy
""",
)
async def health(
    request: Request,
    service: BookingService = Depends(get_booking_service),
) -> dict[str, Any]:
    """Return health status with storage mode."""
    started_at = getattr(request.app.state, "started_at", time.monotonic())
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
        "uptime": round(time.monotonic() - started_at, 3),
        "storage": service.storage_mode.value,
    }
