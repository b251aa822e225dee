from __future__ import annotations

import httpx

from price_alerts.core.config import Settings
from price_alerts.core.errors import PriceFetchError
from price_alerts.services.providers.base import PriceProvider


class CoinGeckoProvider(PriceProvider):
    name = "coingecko"

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self.client = client
        self.url = settings.price_api_url
        self.api_key = settings.price_api_key
        self.currency = settings.reference_currency

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            return {}
        return {"x-cg-demo-api-key": self.api_key}

    async def get_price(self, symbol: str) -> float:
        asset_id = symbol.lower()
        params = {"ids": asset_id, "vs_currencies": self.currency}
        try:
            response = await self.client.get(self.url, params=params, headers=self._headers())
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise PriceFetchError(f"Price lookup failed for {asset_id}: {exc}") from exc

        row = payload.get(asset_id) if isinstance(payload, dict) else None
        if not isinstance(row, dict) or row.get(self.currency) is None:
            raise PriceFetchError(f"No {self.currency} price returned for {asset_id}")

        try:
            return float(row[self.currency])
        except (TypeError, ValueError) as exc:
            raise PriceFetchError(f"Invalid {self.currency} price for {asset_id}: {row[self.currency]!r}") from exc
