"""Tests for the USD→JPY exchange rate client."""

import httpx
import pytest

from ebay_price_sim.currency import ExchangeRateClient

API_URL = "https://api.exchangerate.host/latest?base=USD&symbols=JPY"


def _client(handler, proxy=""):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ExchangeRateClient(url=API_URL, proxy=proxy, fallback=145.0, http_client=http_client)


class TestExchangeRateClient:
    @pytest.mark.asyncio
    async def test_success_rounds_to_two_decimals(self):
        client = _client(lambda request: httpx.Response(200, json={"rates": {"JPY": 151.23456}}))
        assert await client.fetch_usd_jpy() == 151.23
        assert client.last_rate == 151.23

    @pytest.mark.asyncio
    async def test_http_error_falls_back(self):
        client = _client(lambda request: httpx.Response(500, json={}))
        assert await client.fetch_usd_jpy() == 145.0
        assert client.last_rate is None

    @pytest.mark.asyncio
    async def test_missing_field_falls_back(self):
        client = _client(lambda request: httpx.Response(200, json={"success": False}))
        assert await client.fetch_usd_jpy() == 145.0

    @pytest.mark.asyncio
    async def test_bad_body_falls_back(self):
        client = _client(lambda request: httpx.Response(200, text="oops"))
        assert await client.fetch_usd_jpy() == 145.0

    @pytest.mark.asyncio
    async def test_network_error_falls_back(self):
        def handler(request):
            raise httpx.ConnectError("offline", request=request)

        assert await _client(handler).fetch_usd_jpy() == 145.0

    @pytest.mark.asyncio
    async def test_non_positive_rate_falls_back(self):
        client = _client(lambda request: httpx.Response(200, json={"rates": {"JPY": 0}}))
        assert await client.fetch_usd_jpy() == 145.0

    @pytest.mark.asyncio
    async def test_failure_after_success_clears_last_rate(self):
        responses = iter([
            httpx.Response(200, json={"rates": {"JPY": 150}}),
            httpx.Response(503, json={}),
        ])
        client = _client(lambda request: next(responses))
        await client.fetch_usd_jpy()
        assert client.last_rate == 150
        await client.fetch_usd_jpy()
        assert client.last_rate is None

    @pytest.mark.asyncio
    async def test_proxy_wraps_encoded_url(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json={"rates": {"JPY": 150}})

        client = _client(handler, proxy="https://corsproxy.io/?")
        assert client.request_url.startswith("https://corsproxy.io/?https%3A%2F%2F")
        await client.fetch_usd_jpy()
        assert seen[0].startswith("https://corsproxy.io/")
