"""Async Ship&Co rates client using httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import settings
from . import ShipAndCoApiError, ShipAndCoConfigError
from .cache import RateCache
from .filters import filter_and_annotate
from .models import RateQuoteRequest, RatesResult

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Ship&Co API の呼び出しに失敗しました。"
MISSING_KEY_MESSAGE = "SHIPANDCO_API_KEY が設定されていません。"

# 発送元は札幌固定
_FROM_ADDRESS = {
    "country": "JP",
    "zip": "0600000",
    "province": "Hokkaido",
    "city": "Sapporo",
    "address1": "Test",
    "phone": "0000000000",
    "full_name": "Sender",
}


def _json_number(value: float) -> float | int:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def build_rate_request(
    country: str,
    postal: str,
    weight: float,
    width: float,
    height: float,
    depth: float,
) -> dict[str, Any]:
    """Build the fixed-shape Ship&Co ``/rates`` payload for one destination."""
    return {
        "setup": {"currency": "JPY"},
        "from_address": dict(_FROM_ADDRESS),
        "to_address": {
            "country": country,
            "zip": postal,
            "city": "Test City",
            "address1": "Test Address",
            "phone": "0000000000",
            "full_name": "Receiver",
        },
        "products": [
            {
                "name": "Sample Item",
                "quantity": 1,
                "price": 3000,
                "origin_country": "JP",
            }
        ],
        "parcels": [
            {
                "weight": _json_number(weight),
                "amount": 1,
                "width": _json_number(width),
                "height": _json_number(height),
                "depth": _json_number(depth),
            }
        ],
        "customs": {"content_type": "MERCHANDISE"},
    }


def extract_raw_rates(data: Any) -> list[Any]:
    """Accept either a bare array or an object wrapping ``rates``."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("rates"), list):
        return data["rates"]
    return []


def _error_message(data: Any) -> str:
    if isinstance(data, dict):
        for field in ("message", "error"):
            if data.get(field):
                return str(data[field])
    return GENERIC_FAILURE_MESSAGE


class ShipAndCoClient:
    """Fetches, filters and caches international rate quotes."""

    def __init__(
        self,
        cache: RateCache,
        api_key: str | None = None,
        api_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._cache = cache
        self._api_key = settings.shipandco_api_key if api_key is None else api_key
        self._api_url = api_url or settings.shipandco_api_url
        self._client = http_client or httpx.AsyncClient(
            timeout=settings.shipandco_request_timeout,
        )

    @property
    def cache(self) -> RateCache:
        return self._cache

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def fetch_rates(
        self,
        country: str,
        postal: str,
        weight: float,
        width: float,
        height: float,
        depth: float,
    ) -> RatesResult:
        """Return filtered rates for one destination.

        Upstream and configuration failures come back as a result with an
        empty quote list and one error line; only successful results are
        cached.
        """
        request = RateQuoteRequest(country, postal, weight, width, height, depth)
        key = request.cache_key()
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Rate cache hit: %s", key)
            return cached

        payload = build_rate_request(country, postal, weight, width, height, depth)
        try:
            data = await self._post(payload)
        except ShipAndCoApiError as e:
            return RatesResult.failed(country, e.status_code, str(e))

        result = filter_and_annotate(extract_raw_rates(data))
        self._cache.put(key, result)
        return result

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _post(self, payload: dict[str, Any]) -> Any:
        """POST a rate request and return the decoded JSON body."""
        if not self._api_key:
            raise ShipAndCoConfigError(MISSING_KEY_MESSAGE, status_code=500)

        headers = {
            "x-access-token": self._api_key,
            "Content-Type": "application/json",
        }
        try:
            resp = await self._client.post(self._api_url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error("Ship&Co API timeout: %s", e)
            raise ShipAndCoApiError("Ship&Co API がタイムアウトしました。", status_code=504) from e
        except httpx.HTTPError as e:
            logger.error("Ship&Co API HTTP error: %s", e)
            raise ShipAndCoApiError(f"{GENERIC_FAILURE_MESSAGE} ({e})", status_code=502) from e

        try:
            data = resp.json()
        except ValueError:
            data = None

        if not resp.is_success:
            logger.error("Ship&Co API error: status=%s body=%s", resp.status_code, data)
            raise ShipAndCoApiError(_error_message(data), status_code=resp.status_code)

        if data is None:
            logger.error("Ship&Co API returned an unparseable body (status=%s)", resp.status_code)
            raise ShipAndCoApiError(GENERIC_FAILURE_MESSAGE, status_code=resp.status_code)

        logger.info("Ship&Co API success (to=%s)", payload["to_address"]["country"])
        logger.debug("Ship&Co API success payload: %s", data)
        return data
