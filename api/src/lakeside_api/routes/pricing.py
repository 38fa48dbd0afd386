"""Pricing endpoint for stay quotes.

All amounts are whole NZD dollars (e.g., 1294 = $1,294.00).
"""

import datetime as dt

from fastapi import APIRouter, Depends, Query

from lakeside.models import PriceQuote
from lakeside.services import PricingService
from lakeside_api.dependencies import get_pricing_service

router = APIRouter(tags=["pricing"])


@router.get(
    "/pricing/quote",
    summary="Quote a stay",
    description="""
Calculate the price breakdown for a stay.

Returns nightly rate, nights, subtotal, 5% service fee, 15% GST and the
total. Fee and GST are each rounded (half up) before the next step.

**Notes:**
- check_out is exclusive (last night is check_out - 1 day)
- Unknown accommodation IDs are quoted at the default nightly rate
""",
    response_description="Detailed pricing breakdown",
    response_model=PriceQuote,
    responses={
        200: {
            "description": "Quote calculated successfully",
            "content": {
                "application/json": {
                    "example": {
                        "accommodationId": "cottage",
                        "checkIn": "2024-06-01",
                        "checkOut": "2024-06-04",
                        "nightlyRate": 357,
                        "nights": 3,
                        "subtotal": 1071,
                        "serviceFee": 54,
                        "tax": 169,
                        "total": 1294,
                        "currency": "NZD",
                    }
                }
            },
        },
        400: {
            "description": "Invalid date range",
        },
    },
)
async def quote_stay(
    accommodation_id: str = Query(
        ...,
        alias="accommodationId",
        min_length=1,
        description="Accommodation ID",
        examples=["cottage"],
    ),
    check_in: dt.date = Query(
        ...,
        alias="checkIn",
        description="Check-in date (YYYY-MM-DD)",
        examples=["2024-06-01"],
    ),
    check_out: dt.date = Query(
        ...,
        alias="checkOut",
        description="Check-out date (YYYY-MM-DD)",
        examples=["2024-06-04"],
    ),
    service: PricingService = Depends(get_pricing_service),
) -> PriceQuote:
    """Quote a stay; InvalidDateRange maps to 400."""
    return service.quote(accommodation_id, check_in, check_out)
