"""Payment endpoint for creating Stripe PaymentIntents.

The amount is always computed server-side from the stay so a client cannot
set its own price.
"""

import logging

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from lakeside.config import Settings, get_settings
from lakeside.models import PaymentFailed, PaymentNotConfigured
from lakeside.services import PricingService, StripeService, StripeServiceError
from lakeside_api.dependencies import get_pricing_service, get_stripe_service
from lakeside_api.models.payments import PaymentIntentRequest, PaymentIntentResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


@router.post(
    "/create-payment-intent",
    summary="Create a payment intent",
    description="""
Quote the stay and create a Stripe PaymentIntent for the total.

Returns the client secret used by Stripe.js to confirm the payment, plus
the pricing the intent was created for.

**Errors:**
- 400 if check-out is not after check-in
- 503 if Stripe is not configured
- 502 if Stripe rejects the request
""",
    response_model=PaymentIntentResponse,
    response_model_by_alias=True,
)
async def create_payment_intent(
    request: PaymentIntentRequest,
    pricing: PricingService = Depends(get_pricing_service),
    stripe: StripeService = Depends(get_stripe_service),
    settings: Settings = Depends(get_settings),
) -> PaymentIntentResponse:
    """Create a PaymentIntent for the quoted stay total."""
    quote = pricing.quote(request.accommodation_id, request.check_in, request.check_out)

    if not stripe.is_configured:
        raise PaymentNotConfigured()

    try:
        intent = await run_in_threadpool(
            stripe.create_payment_intent,
            amount_cents=pricing.amount_in_cents(quote),
            currency=settings.payment_currency,
            metadata={
                "accommodationId": request.accommodation_id,
                "checkIn": request.check_in.isoformat(),
                "checkOut": request.check_out.isoformat(),
                "guests": str(request.guests),
            },
        )
    except StripeServiceError as e:
        logger.error("Payment intent failed for %s: %s", request.accommodation_id, e)
        raise PaymentFailed(details={"stripe_error_code": e.stripe_error_code}) from e

    return PaymentIntentResponse(
        client_secret=intent["client_secret"],
        payment_intent_id=intent["payment_intent_id"],
        pricing=quote,
    )
