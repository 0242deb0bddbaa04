from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Callable

from bitcoin_tracking.core.config import Settings
from bitcoin_tracking.core.errors import InvalidComputationError
from bitcoin_tracking.services.cnb import FxFeedClient
from bitcoin_tracking.services.coindesk import PriceFeedClient
from bitcoin_tracking.services.feeds import RateFeed
from bitcoin_tracking.utils.time import utc_now

__all__ = [
    "RateAggregator",
    "RateSnapshot",
    "SNAPSHOT_SOURCE",
    "build_rate_aggregator",
    "compute_btc_czk_price",
    "quantize",
]

logger = logging.getLogger(__name__)

SNAPSHOT_SOURCE = "CoinDesk API + ČNB API"
PRICE_PLACES = 2
RATE_PLACES = 4


def quantize(value: Decimal, places: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN)


def compute_btc_czk_price(price_btc_eur: Decimal, rate_eur_czk: Decimal) -> Decimal:
    """BTC/CZK = BTC/EUR * EUR/CZK, unrounded."""

    if price_btc_eur <= 0:
        raise InvalidComputationError("BTC/EUR price must be greater than 0")
    if rate_eur_czk <= 0:
        raise InvalidComputationError("EUR/CZK rate must be greater than 0")
    return price_btc_eur * rate_eur_czk


@dataclass(frozen=True)
class RateSnapshot:
    fetched_at: datetime
    price_btc_eur: Decimal
    rate_eur_czk: Decimal
    price_btc_czk: Decimal
    source: str = SNAPSHOT_SOURCE

    @classmethod
    def from_rates(
        cls,
        price_btc_eur: Decimal,
        rate_eur_czk: Decimal,
        fetched_at: datetime,
        source: str = SNAPSHOT_SOURCE,
    ) -> "RateSnapshot":
        price_btc_czk = compute_btc_czk_price(price_btc_eur, rate_eur_czk)
        return cls(
            fetched_at=fetched_at,
            price_btc_eur=quantize(price_btc_eur, PRICE_PLACES),
            rate_eur_czk=quantize(rate_eur_czk, RATE_PLACES),
            price_btc_czk=quantize(price_btc_czk, PRICE_PLACES),
            source=source,
        )


class RateAggregator:
    """Combines the BTC/EUR price feed with the EUR/CZK fx feed.

    Both feeds are queried one after the other. A failure in either one
    propagates unchanged and no partial snapshot is produced.
    """

    def __init__(
        self,
        price_feed: RateFeed,
        fx_feed: RateFeed,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.price_feed = price_feed
        self.fx_feed = fx_feed
        self._clock = clock

    def get_current_rate(self) -> RateSnapshot:
        fetched_at = self._clock()
        logger.info("Fetching current Bitcoin rate")

        try:
            price_btc_eur = self.price_feed.fetch_rate()
            logger.info("BTC/EUR price: %s", price_btc_eur)

            rate_eur_czk = self.fx_feed.fetch_rate()
            logger.info("EUR/CZK rate: %s", rate_eur_czk)

            snapshot = RateSnapshot.from_rates(price_btc_eur, rate_eur_czk, fetched_at)
        except Exception:
            logger.exception("Error fetching current Bitcoin rate")
            raise

        logger.info("Calculated BTC/CZK price: %s", snapshot.price_btc_czk)
        return snapshot


def build_rate_aggregator(settings: Settings) -> RateAggregator:
    timeout = settings.http_timeout_seconds
    return RateAggregator(
        price_feed=PriceFeedClient(
            settings.price_feed_base_url,
            settings.price_feed_endpoint,
            timeout=timeout,
        ),
        fx_feed=FxFeedClient(
            settings.fx_feed_base_url,
            settings.fx_feed_endpoint,
            timeout=timeout,
        ),
    )
