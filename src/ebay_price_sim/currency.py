"""USD→JPY exchange rate lookup with a fixed fallback."""

from __future__ import annotations

import logging
import math
from urllib.parse import quote

import httpx

from .config import settings

logger = logging.getLogger(__name__)


class ExchangeRateClient:
    """Async client for the public exchange rate endpoint.

    Never raises: any failure yields ``settings.exchange_rate_fallback``.
    """

    def __init__(
        self,
        url: str | None = None,
        proxy: str | None = None,
        fallback: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url or settings.exchange_rate_url
        self._proxy = settings.exchange_rate_proxy if proxy is None else proxy
        self._fallback = settings.exchange_rate_fallback if fallback is None else fallback
        self._client = http_client or httpx.AsyncClient(
            timeout=settings.exchange_rate_timeout,
            follow_redirects=True,
        )
        self._last_rate: float | None = None

    @property
    def request_url(self) -> str:
        if self._proxy:
            return self._proxy + quote(self._url, safe="")
        return self._url

    @property
    def last_rate(self) -> float | None:
        """Rate from the most recent fetch, or None if it fell back."""
        return self._last_rate

    async def fetch_usd_jpy(self) -> float:
        try:
            resp = await self._client.get(self.request_url)
            resp.raise_for_status()
            data = resp.json()
            rate = float(data["rates"]["JPY"])
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning("Exchange rate fetch failed, using fallback %.2f: %s", self._fallback, e)
            self._last_rate = None
            return self._fallback

        if not math.isfinite(rate) or rate <= 0:
            logger.warning("Exchange rate API returned %s, using fallback", rate)
            self._last_rate = None
            return self._fallback

        self._last_rate = round(rate, 2)
        return self._last_rate

    async def close(self) -> None:
        await self._client.aclose()
