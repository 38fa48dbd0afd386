"""API-specific request/response models.

Domain models (Booking, PriceQuote, Accommodation) are in lakeside.models
and are reused here where appropriate.

Modules:
- common: Shared response wrappers and error models
- bookings: Booking request/response models
- payments: Payment intent request/response models
- pricing: Accommodation listing response
- contact: Contact form response
"""

__all__: list[str] = []
