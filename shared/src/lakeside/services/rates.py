"""Display rates and accommodation listing.

Rates shown on the accommodation list come from the Uplisting channel
manager when it is configured, otherwise from the configured table below.
Checkout pricing is separate and lives in PricingService.
"""

from typing import Any

import httpx

from lakeside.models import Accommodation, PriceSource
from lakeside.utils.logging import get_logger

logger = get_logger(__name__)

# Configured nightly display rates in NZD
DISPLAY_RATES: dict[str, int] = {
    "pinot": 498,
    "rose": 498,
    "cottage": 245,
}

ACCOMMODATIONS: tuple[dict[str, Any], ...] = (
    {
        "id": "pinot",
        "name": "Dome Pinot",
        "description": "Luxury dome with stunning lake views",
        "max_guests": 2,
    },
    {
        "id": "rose",
        "name": "Dome Rosé",
        "description": "Romantic dome perfect for couples",
        "max_guests": 2,
    },
    {
        "id": "cottage",
        "name": "Lakeside Cottage",
        "description": "Cozy cottage with lake access",
        "max_guests": 4,
    },
)


class RateProvider:
    """Source of nightly display rates.

    Usage:
        provider = RateProvider(api_key="...", api_url="https://api.uplisting.io")
        accommodations = await provider.list_accommodations()
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: Uplisting API key; without it configured rates are used
            api_url: Uplisting API base URL
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (for testing)
        """
        self.api_key = api_key
        self.api_url = api_url.rstrip("/") if api_url else None
        self.timeout = timeout
        self._transport = transport

    @property
    def price_source(self) -> PriceSource:
        return PriceSource.LIVE if self.api_key else PriceSource.CONFIGURED

    async def _fetch_live_rates(self) -> dict[str, int]:
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as client:
            response = await client.get(
                f"{self.api_url}/properties/rates",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
            )
            response.raise_for_status()
            data = response.json()

        rates = data.get("rates", {}) if isinstance(data, dict) else {}
        return {
            accommodation_id: int(rate)
            for accommodation_id, rate in rates.items()
            if accommodation_id in DISPLAY_RATES
            and isinstance(rate, (int, float))
            and not isinstance(rate, bool)
        }

    async def get_rates(self) -> dict[str, int]:
        """Get nightly display rates, preferring live values when available.

        Returns:
            Mapping of accommodation ID to nightly rate
        """
        rates = dict(DISPLAY_RATES)
        if not (self.api_key and self.api_url):
            return rates

        try:
            rates.update(await self._fetch_live_rates())
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching live prices, using defaults: %s", e)
        return rates

    async def list_accommodations(self) -> list[Accommodation]:
        """Get every accommodation with its current display rate."""
        rates = await self.get_rates()
        accommodations = [
            Accommodation(
                **info,
                price=rates[info["id"]],
                price_source=self.price_source,
            )
            for info in ACCOMMODATIONS
        ]

        logger.info(
            "Accommodations fetched successfully: %d (price source: %s)",
            len(accommodations),
            self.price_source.value,
        )
        return accommodations
