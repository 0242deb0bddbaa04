from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

import httpx

from bitcoin_tracking.services.feeds import HttpFeedClient

__all__ = ["FxFeedClient", "parse_eur_rate"]

logger = logging.getLogger(__name__)

CURRENCY_MARKER = "|EUR|"
RATE_FIELD_INDEX = 4


def parse_eur_rate(text: str) -> Decimal:
    """Extract the EUR rate from a ČNB daily rates text file.

    The file is a date header, a column header and then
    ``country|currency|amount|code|rate`` lines. The first line containing
    ``|EUR|`` wins. ČNB publishes comma decimals, both separators are
    accepted. Raises ``ValueError`` when no usable EUR line exists.
    """

    for line in text.splitlines():
        if CURRENCY_MARKER not in line:
            continue

        parts = line.split("|")
        if len(parts) <= RATE_FIELD_INDEX:
            raise ValueError(f"EUR line has too few fields: {line!r}")

        raw_rate = parts[RATE_FIELD_INDEX].strip().replace(",", ".")
        try:
            rate = Decimal(raw_rate)
        except InvalidOperation as exc:
            raise ValueError(f"Invalid EUR rate {raw_rate!r}") from exc

        logger.debug("Parsed EUR rate %s from line %r", rate, line)
        return rate

    raise ValueError("EUR rate not found in ČNB response")


class FxFeedClient(HttpFeedClient):
    """EUR/CZK daily rate from the Czech National Bank text feed."""

    service = "fx-feed"

    def fetch_eur_czk_rate(self) -> Decimal:
        return self.fetch_rate()

    def _parse(self, response: httpx.Response) -> Decimal:
        try:
            return parse_eur_rate(response.text)
        except ValueError as exc:
            raise self._parse_error(f"Unexpected fx-feed payload: {exc}") from exc
