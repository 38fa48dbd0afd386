"""FastAPI dependency injection providers for shared services.

Stateless services are built from settings and cached with @lru_cache.
The BookingService owns both booking stores, so it is created once in the
application lifespan (the durable store needs an async connect step) and
kept on app.state rather than in a module global.

Usage in routes:
    from lakeside_api.dependencies import get_booking_service

    @router.get("/bookings/{reference}")
    async def get_booking(
        reference: str,
        service: BookingService = Depends(get_booking_service),
    ):
        ...

Service Dependency Graph:
    Settings (get_settings)
        ├── BookingService (app.state, built by build_booking_service)
        │       ├── ConnectedBookingStore | UnavailableBookingStore
        │       └── InMemoryBookingStore
        ├── PricingService
        ├── RateProvider
        ├── StripeService
        └── NotificationService

Testing:
    Use app.dependency_overrides or reset_services() between tests.
"""

from functools import lru_cache

from fastapi import Request

from lakeside.config import Settings, get_settings
from lakeside.services import (
    BookingService,
    InMemoryBookingStore,
    NotificationService,
    PricingService,
    RateProvider,
    StripeService,
    connect_booking_store,
)


async def build_booking_service(settings: Settings) -> BookingService:
    """Connect the durable store and build the BookingService.

    Args:
        settings: Application settings

    Returns:
        BookingService with a fresh fallback store
    """
    durable = await connect_booking_store(
        settings.database_url,
        timeout=settings.database_timeout_seconds,
        ssl=settings.database_ssl,
    )
    return BookingService(durable=durable, fallback=InMemoryBookingStore())


def get_booking_service(request: Request) -> BookingService:
    """Get the BookingService created at startup."""
    return request.app.state.booking_service


@lru_cache
def get_pricing_service() -> PricingService:
    """Get cached PricingService instance."""
    return PricingService(currency=get_settings().payment_currency)


@lru_cache
def get_rate_provider() -> RateProvider:
    """Get cached RateProvider configured for Uplisting when keys are set."""
    settings = get_settings()
    api_key = settings.uplisting_api_key
    return RateProvider(
        api_key=api_key.get_secret_value() if api_key else None,
        api_url=settings.uplisting_api_url,
    )


@lru_cache
def get_stripe_service() -> StripeService:
    """Get cached StripeService instance."""
    settings = get_settings()
    secret_key = settings.stripe_secret_key
    return StripeService(
        secret_key.get_secret_value() if secret_key else None,
        secret_key_parameter=settings.stripe_secret_key_parameter,
    )


@lru_cache
def get_notification_service() -> NotificationService:
    """Get cached NotificationService instance."""
    settings = get_settings()
    return NotificationService(
        sender=settings.notification_sender,
        recipient=settings.notification_recipient,
    )


def reset_services() -> None:
    """Clear all cached service instances and settings.

    Call this in test fixtures to ensure clean state between tests.
    """
    get_pricing_service.cache_clear()
    get_rate_provider.cache_clear()
    get_stripe_service.cache_clear()
    get_notification_service.cache_clear()
    get_settings.cache_clear()
