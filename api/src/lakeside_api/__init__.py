"""FastAPI application for the Lakeside Retreat booking REST API.

Endpoints are served under /api:
- Health checks
- Accommodation listing and pricing quotes
- Stripe payment intents
- Booking confirmation and lookup
- Contact form
"""
