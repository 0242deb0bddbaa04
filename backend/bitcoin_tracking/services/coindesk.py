from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from bitcoin_tracking.services.feeds import HttpFeedClient

__all__ = ["PriceFeedClient", "extract_btc_eur_price"]

INSTRUMENT = "BTC-EUR"


def extract_btc_eur_price(payload: Any) -> Decimal:
    """Return ``data.BTC-EUR.price`` from a decoded price-feed payload.

    Raises ``ValueError`` when the path is missing or the value is not numeric.
    """

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        raise ValueError("Missing 'data' object in price-feed payload")

    instrument = data.get(INSTRUMENT)
    if not isinstance(instrument, dict):
        raise ValueError(f"Missing '{INSTRUMENT}' entry in price-feed payload")

    if "price" not in instrument:
        raise ValueError(f"Missing price for '{INSTRUMENT}' in price-feed payload")
    price = instrument["price"]

    # bool is an int subclass and must not pass as a price
    if isinstance(price, bool) or not isinstance(price, (int, float, str, Decimal)):
        raise ValueError(f"Unexpected price type {type(price).__name__}")

    if isinstance(price, Decimal):
        return price
    try:
        return Decimal(str(price).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid price value {price!r}") from exc


class PriceFeedClient(HttpFeedClient):
    """BTC/EUR spot price from the CoinDesk data API."""

    service = "price-feed"

    def fetch_btc_eur_price(self) -> Decimal:
        return self.fetch_rate()

    def _parse(self, response: httpx.Response) -> Decimal:
        try:
            payload = response.json(parse_float=Decimal)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise self._parse_error("Invalid JSON received from price-feed") from exc

        try:
            return extract_btc_eur_price(payload)
        except ValueError as exc:
            raise self._parse_error(f"Unexpected price-feed payload: {exc}") from exc
