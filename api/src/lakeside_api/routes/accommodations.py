"""Accommodation listing endpoint."""

from fastapi import APIRouter, Depends

from lakeside.services import RateProvider
from lakeside_api.dependencies import get_rate_provider
from lakeside_api.models.pricing import AccommodationListResponse

router = APIRouter(tags=["accommodations"])


@router.get(
    "/accommodations",
    summary="List accommodations",
    description="""
List the retreat's accommodation units with nightly display rates.

**Notes:**
- Rates come from Uplisting when configured (`priceSource: live`),
  otherwise from configured defaults (`priceSource: configured`)
- A failed Uplisting call falls back to configured rates
""",
    response_model=AccommodationListResponse,
)
async def list_accommodations(
    provider: RateProvider = Depends(get_rate_provider),
) -> AccommodationListResponse:
    """List accommodations with display rates."""
    return AccommodationListResponse(
        accommodations=await provider.list_accommodations()
    )
