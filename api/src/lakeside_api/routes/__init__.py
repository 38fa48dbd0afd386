"""API route modules."""

from lakeside_api.routes.accommodations import router as accommodations_router
from lakeside_api.routes.bookings import router as bookings_router
from lakeside_api.routes.contact import router as contact_router
from lakeside_api.routes.health import router as health_router
from lakeside_api.routes.payments import router as payments_router
from lakeside_api.routes.pricing import router as pricing_router

__all__ = [
    "accommodations_router",
    "bookings_router",
    "contact_router",
    "health_router",
    "payments_router",
    "pricing_router",
]
