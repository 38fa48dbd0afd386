"""Backend services for Lakeside Retreat bookings."""

from .booking import BookingService
from .booking_store import (
    BookingStore,
    ConnectedBookingStore,
    UnavailableBookingStore,
    connect_booking_store,
)
from .fallback_store import InMemoryBookingStore
from .notification_service import NotificationService
from .pricing import PricingService
from .rates import RateProvider
from .reference import ReferenceGenerator
from .ssm_service import SSMService, SSMServiceError
from .stripe_service import StripeService, StripeServiceError

__all__ = [
    "BookingService",
    "BookingStore",
    "ConnectedBookingStore",
    "UnavailableBookingStore",
    "connect_booking_store",
    "InMemoryBookingStore",
    "NotificationService",
    "PricingService",
    "RateProvider",
    "ReferenceGenerator",
    "SSMService",
    "SSMServiceError",
    "StripeService",
    "StripeServiceError",
]
