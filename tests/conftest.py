"""Test fixtures: controllable clock, fake Ship&Co transport and sample quotes."""

import copy

import httpx
import pytest

from ebay_price_sim.shipping.cache import RateCache
from ebay_price_sim.shipping.client import ShipAndCoClient


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


_SAMPLE_RATES = [
    {"carrier": "DHL", "service": "dhl_express_worldwide", "price": 5200, "currency": "JPY"},
    {"carrier": "fedex", "service": "fedex_international_economy", "price": 4800, "currency": "JPY"},
    {"carrier": "Japan Post", "service": "japanpost_ems", "price": 3900, "currency": "JPY"},
    {"carrier": "japanpost", "service": "japanpost_epacket_light", "price": 1700, "currency": "JPY"},
    {"carrier": "Japan Post", "service": "japanpost_smallpacket_air", "price": 1500, "currency": "JPY"},
]


@pytest.fixture()
def sample_rates():
    return copy.deepcopy(_SAMPLE_RATES)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def rate_cache(clock):
    return RateCache(clock=clock)


@pytest.fixture()
def make_client(rate_cache):
    """Factory for a ShipAndCoClient whose HTTP calls are served by ``handler``."""

    def _make(handler, api_key="test_key"):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ShipAndCoClient(rate_cache, api_key=api_key, http_client=http_client)

    return _make
