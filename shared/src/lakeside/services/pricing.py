"""Pricing service for stay quotes."""

import datetime as dt
import math
from decimal import ROUND_HALF_UP, Decimal

from lakeside.models import InvalidDateRange, PriceQuote

# Checkout rates per night in NZD, including the lake-view premium
NIGHTLY_RATES: dict[str, int] = {
    "pinot": 659,
    "rose": 659,
    "cottage": 357,
}

# Applied to accommodation IDs missing from NIGHTLY_RATES
DEFAULT_NIGHTLY_RATE = 500

SERVICE_FEE_RATE = Decimal("0.05")
GST_RATE = Decimal("0.15")


def round_half_up(value: Decimal) -> int:
    """Round to the nearest whole currency unit, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PricingService:
    """Service for stay price calculations.

    Quotes are deterministic for a given accommodation and date range.
    """

    def __init__(
        self,
        rates: dict[str, int] | None = None,
        default_rate: int = DEFAULT_NIGHTLY_RATE,
        currency: str = "NZD",
    ) -> None:
        """Initialize pricing service.

        Args:
            rates: Nightly rate per accommodation ID
            default_rate: Rate for accommodation IDs not in rates
            currency: Currency code reported on quotes
        """
        self.rates = dict(NIGHTLY_RATES if rates is None else rates)
        self.default_rate = default_rate
        self.currency = currency.upper()

    def nightly_rate(self, accommodation_id: str) -> int:
        """Get the nightly rate, falling back to the default for unknown IDs."""
        return self.rates.get(accommodation_id, self.default_rate)

    def quote(
        self,
        accommodation_id: str,
        check_in: dt.date,
        check_out: dt.date,
    ) -> PriceQuote:
        """Calculate the price breakdown for a stay.

        Fee and tax are each rounded before the next step uses them.

        Args:
            accommodation_id: Accommodation unit ID
            check_in: Check-in date
            check_out: Check-out date

        Returns:
            PriceQuote with breakdown

        Raises:
            InvalidDateRange: If check_out is not after check_in
        """
        if check_out <= check_in:
            raise InvalidDateRange(
                details={
                    "check_in": check_in.isoformat(),
                    "check_out": check_out.isoformat(),
                }
            )

        nightly_rate = self.nightly_rate(accommodation_id)
        nights = math.ceil((check_out - check_in) / dt.timedelta(days=1))
        subtotal = nightly_rate * nights
        service_fee = round_half_up(Decimal(subtotal) * SERVICE_FEE_RATE)
        tax = round_half_up(Decimal(subtotal + service_fee) * GST_RATE)

        return PriceQuote(
            accommodation_id=accommodation_id,
            check_in=check_in,
            check_out=check_out,
            nightly_rate=nightly_rate,
            nights=nights,
            subtotal=subtotal,
            service_fee=service_fee,
            tax=tax,
            total=subtotal + service_fee + tax,
            currency=self.currency,
        )

    @staticmethod
    def amount_in_cents(quote: PriceQuote) -> int:
        """Get the quote total in the smallest currency unit."""
        return quote.total * 100
