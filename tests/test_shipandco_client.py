"""Tests for the Ship&Co rate fetcher."""

import json

import httpx
import pytest

from ebay_price_sim.shipping.client import build_rate_request, extract_raw_rates


def _json_handler(body, status_code=200, calls=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(status_code, json=body)

    return handler


class TestBuildRateRequest:
    def test_payload_shape(self):
        payload = build_rate_request("GB", "SW1A 1AA", 500.0, 20.0, 10.0, 7.5)
        assert payload["setup"] == {"currency": "JPY"}
        assert payload["from_address"]["country"] == "JP"
        assert payload["from_address"]["city"] == "Sapporo"
        assert payload["to_address"]["country"] == "GB"
        assert payload["to_address"]["zip"] == "SW1A 1AA"
        assert payload["products"] == [
            {"name": "Sample Item", "quantity": 1, "price": 3000, "origin_country": "JP"}
        ]
        assert payload["parcels"] == [
            {"weight": 500, "amount": 1, "width": 20, "height": 10, "depth": 7.5}
        ]
        assert payload["customs"] == {"content_type": "MERCHANDISE"}


class TestExtractRawRates:
    def test_bare_list(self):
        assert extract_raw_rates([{"carrier": "DHL"}]) == [{"carrier": "DHL"}]

    def test_wrapped_rates(self):
        assert extract_raw_rates({"rates": [{"carrier": "DHL"}]}) == [{"carrier": "DHL"}]

    def test_anything_else_is_empty(self):
        assert extract_raw_rates({"rates": "nope"}) == []
        assert extract_raw_rates({"data": []}) == []
        assert extract_raw_rates("text") == []


class TestFetchRates:
    @pytest.mark.asyncio
    async def test_success_sends_token_and_payload(self, make_client, sample_rates):
        calls = []
        client = make_client(_json_handler(sample_rates, calls=calls))

        result = await client.fetch_rates("US", "10001", 500, 20, 10, 10)

        assert len(result.rates) == 5
        assert result.errors == []
        request = calls[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.shipandco.com/v1/rates"
        assert request.headers["x-access-token"] == "test_key"
        assert json.loads(request.content)["to_address"]["zip"] == "10001"

    @pytest.mark.asyncio
    async def test_wrapped_response(self, make_client, sample_rates):
        client = make_client(_json_handler({"rates": sample_rates}))
        result = await client.fetch_rates("GB", "SW1A 1AA", 500, 20, 10, 10)
        assert len(result.rates) == 5

    @pytest.mark.asyncio
    async def test_cache_hit_skips_network(self, make_client, sample_rates):
        calls = []
        client = make_client(_json_handler(sample_rates, calls=calls))

        first = await client.fetch_rates("GB", "sw1a 1aa", 500, 20, 10, 10)
        second = await client.fetch_rates("GB", " SW1A 1AA ", 500, 20, 10, 10)

        assert second is first
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_refetch_after_ttl(self, make_client, sample_rates, clock):
        calls = []
        client = make_client(_json_handler(sample_rates, calls=calls))

        await client.fetch_rates("US", "10001", 500, 20, 10, 10)
        clock.advance(59)
        await client.fetch_rates("US", "10001", 500, 20, 10, 10)
        assert len(calls) == 1

        clock.advance(1)
        await client.fetch_rates("US", "10001", 500, 20, 10, 10)
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_missing_api_key_skips_network(self, make_client):
        calls = []
        client = make_client(_json_handler([], calls=calls), api_key="")

        result = await client.fetch_rates("US", "10001", 500, 20, 10, 10)

        assert calls == []
        assert result.rates == []
        assert result.errors == [
            "Ship&Co API 失敗 (US): 500 SHIPANDCO_API_KEY が設定されていません。"
        ]

    @pytest.mark.asyncio
    async def test_http_error_uses_api_message(self, make_client):
        client = make_client(_json_handler({"message": "Invalid token"}, status_code=401))
        result = await client.fetch_rates("GB", "SW1A 1AA", 500, 20, 10, 10)
        assert result.rates == []
        assert result.errors == ["Ship&Co API 失敗 (GB): 401 Invalid token"]

    @pytest.mark.asyncio
    async def test_http_error_falls_back_to_error_field(self, make_client):
        client = make_client(_json_handler({"error": "Bad request"}, status_code=400))
        result = await client.fetch_rates("GB", "SW1A 1AA", 500, 20, 10, 10)
        assert result.errors == ["Ship&Co API 失敗 (GB): 400 Bad request"]

    @pytest.mark.asyncio
    async def test_http_error_with_unparseable_body(self, make_client):
        client = make_client(lambda request: httpx.Response(502, text="<html>Bad gateway</html>"))
        result = await client.fetch_rates("US", "10001", 500, 20, 10, 10)
        assert result.errors == ["Ship&Co API 失敗 (US): 502 Ship&Co API の呼び出しに失敗しました。"]

    @pytest.mark.asyncio
    async def test_unparseable_success_body_is_an_error(self, make_client):
        client = make_client(lambda request: httpx.Response(200, text="not json"))
        result = await client.fetch_rates("US", "10001", 500, 20, 10, 10)
        assert result.rates == []
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Ship&Co API 失敗 (US): 200")

    @pytest.mark.asyncio
    async def test_timeout_becomes_error_entry(self, make_client):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)
        result = await client.fetch_rates("US", "10001", 500, 20, 10, 10)
        assert result.rates == []
        assert result.errors == ["Ship&Co API 失敗 (US): 504 Ship&Co API がタイムアウトしました。"]

    @pytest.mark.asyncio
    async def test_connect_error_becomes_error_entry(self, make_client):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        result = await client.fetch_rates("US", "10001", 500, 20, 10, 10)
        assert result.errors[0].startswith("Ship&Co API 失敗 (US): 502 ")

    @pytest.mark.asyncio
    async def test_failures_are_not_cached(self, make_client, rate_cache):
        client = make_client(_json_handler({"message": "down"}, status_code=503))
        await client.fetch_rates("US", "10001", 500, 20, 10, 10)
        assert len(rate_cache) == 0

    @pytest.mark.asyncio
    async def test_close(self, make_client):
        client = make_client(_json_handler([]))
        await client.close()
