"""Price calculator and exchange rate endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ..pricing import calculate_price
from ..schemas import ExchangeRateResponse, PriceRequest, PriceResponse

router = APIRouter(prefix="/api", tags=["pricing"])

RATES_EXCEED_MESSAGE = "利益率と手数料率の合計が100%を超えています。"


def price_response(body: PriceRequest) -> PriceResponse:
    try:
        quote = calculate_price(
            cost_price=body.cost_price,
            shipping_fee=body.shipping_fee,
            fee_pct=body.fee_pct,
            target_profit_pct=body.target_profit_pct,
            exchange_rate=body.exchange_rate,
            discount_pct=body.discount_pct,
        )
    except ValueError:
        return PriceResponse(error=RATES_EXCEED_MESSAGE)
    return PriceResponse(
        sell_price_jpy=quote.sell_price_jpy,
        profit_jpy=quote.profit_jpy,
        sell_price_usd=quote.sell_price_usd,
        original_price_usd=quote.original_price_usd,
        us_duty_usd=quote.us_duty_usd,
    )


@router.post("/price", response_model=PriceResponse)
def post_price(body: PriceRequest):
    """Required sell price for the given cost, fee and target margin."""
    return price_response(body)


@router.get("/exchange-rate", response_model=ExchangeRateResponse)
async def get_exchange_rate():
    from ..main import app_state

    client = app_state.get("exchange_rate")
    if client is None:
        raise HTTPException(503, "Exchange rate client is not initialized")
    rate = await client.fetch_usd_jpy()
    return ExchangeRateResponse(rate=rate, fallback=client.last_rate is None)
