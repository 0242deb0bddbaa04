from __future__ import annotations

import logging
from decimal import Decimal
from typing import Protocol, runtime_checkable

import httpx

from bitcoin_tracking.core.errors import ExternalErrorKind, ExternalServiceError

__all__ = ["HttpFeedClient", "RateFeed"]

logger = logging.getLogger(__name__)


@runtime_checkable
class RateFeed(Protocol):
    """A source able to deliver one positive rate per call."""

    service: str

    def fetch_rate(self) -> Decimal:
        ...


class HttpFeedClient:
    """Shared GET plumbing for the rate feeds.

    Subclasses set ``service`` and implement ``_parse``. Every transport,
    status and payload failure surfaces as :class:`ExternalServiceError`;
    nothing is retried here.
    """

    service = "feed"

    def __init__(
        self,
        base_url: str,
        endpoint: str,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    def _parse(self, response: httpx.Response) -> Decimal:
        raise NotImplementedError

    def fetch_rate(self) -> Decimal:
        url = self.url
        logger.info("Requesting %s at %s", self.service, url)

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning("%s returned HTTP %s: %s", self.service, status_code, exc.response.text[:200])
            raise ExternalServiceError(
                self.service,
                f"{self.service} returned HTTP {status_code}",
                kind=ExternalErrorKind.HTTP_STATUS,
                status_code=status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("%s request failed: %s", self.service, exc)
            raise ExternalServiceError(
                self.service,
                f"{self.service} request failed (network error)",
                kind=ExternalErrorKind.NETWORK,
            ) from exc

        value = self._parse(response)
        if not value.is_finite():
            raise self._parse_error(f"{self.service} returned a non-finite value")

        logger.info("%s value is %s", self.service, value)
        return value

    def _parse_error(self, message: str) -> ExternalServiceError:
        logger.error(message)
        return ExternalServiceError(self.service, message, kind=ExternalErrorKind.PARSE)
