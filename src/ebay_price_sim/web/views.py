"""Web UI views: serves the Jinja2 calculator page and its htmx partials."""

from __future__ import annotations

import math
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from ..api.pricing import price_response
from ..config import settings
from ..schemas import PriceRequest, RatesRequest
from ..shipping.catalog import (
    DHL_SERVICES,
    FEDEX_SERVICES,
    JAPAN_POST_SERVICE_INFO,
    format_carrier,
    format_service_label,
    select_display_rates,
)
from ..shipping.service import get_destination_rates

_template_dir = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(_template_dir))
templates.env.filters["carrier"] = format_carrier
templates.env.filters["service_label"] = format_service_label

router = APIRouter(tags=["web"])


# --- Full pages ---


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    defaults = {
        "cost_price": 0,
        "shipping_fee": settings.default_shipping_fee,
        "fee_pct": settings.default_fee_pct,
        "target_profit_pct": settings.default_target_profit_pct,
        "discount_pct": settings.default_discount_pct,
        "weight": settings.default_weight,
        "width": settings.default_width,
        "height": settings.default_height,
        "depth": settings.default_depth,
        "us_zip": settings.default_us_zip,
        "uk_postcode": settings.default_uk_postcode,
    }
    return templates.TemplateResponse(request, "index.html", {
        "defaults": defaults,
        "fallback_rate": settings.exchange_rate_fallback,
    })


# --- htmx partials ---


@router.get("/partials/exchange-rate", response_class=HTMLResponse)
async def exchange_rate_partial(request: Request):
    from ..main import app_state

    client = app_state.get("exchange_rate")
    rate = await client.fetch_usd_jpy() if client else settings.exchange_rate_fallback
    return templates.TemplateResponse(request, "partials/exchange_rate.html", {
        "rate": rate,
        "fallback": client is None or client.last_rate is None,
    })


def _number_field(value: str | None, default: float) -> float | str:
    """Blank or non-finite input counts as 0; an absent field takes the default."""
    if value is None:
        return default
    value = value.strip()
    if not value:
        return 0
    try:
        number = float(value)
    except ValueError:
        return value
    return number if math.isfinite(number) else 0


@router.get("/partials/price", response_class=HTMLResponse)
def price_partial(
    request: Request,
    cost_price: str | None = None,
    shipping_fee: str | None = None,
    fee_pct: str | None = None,
    target_profit_pct: str | None = None,
    exchange_rate: str | None = None,
    discount_pct: str | None = None,
):
    try:
        body = PriceRequest(
            cost_price=_number_field(cost_price, 0),
            shipping_fee=_number_field(shipping_fee, settings.default_shipping_fee),
            fee_pct=_number_field(fee_pct, settings.default_fee_pct),
            target_profit_pct=_number_field(target_profit_pct, settings.default_target_profit_pct),
            exchange_rate=_number_field(exchange_rate, 0.0),
            discount_pct=_number_field(discount_pct, settings.default_discount_pct),
        )
    except ValidationError:
        return HTMLResponse("<div class='result'>入力値が不正です。</div>")
    return templates.TemplateResponse(request, "partials/price_summary.html", {
        "price": price_response(body),
    })


@router.get("/partials/rates", response_class=HTMLResponse)
async def rates_partial(
    request: Request,
    weight: str = "",
    width: str = "",
    height: str = "",
    depth: str = "",
    us_zip: str = "",
    uk_postcode: str = "",
    show_errors: bool = False,
):
    from ..main import app_state

    try:
        params = RatesRequest(
            weight=weight, width=width, height=height, depth=depth,
            us_zip=us_zip, uk_postcode=uk_postcode,
        )
    except ValidationError:
        return templates.TemplateResponse(request, "partials/rates.html", {
            "error": "重量・サイズの入力が不正です。",
            "destinations": [],
            "show_errors": show_errors,
        })

    client = app_state.get("shipandco")
    if client is None:
        return templates.TemplateResponse(request, "partials/rates.html", {
            "error": "送料取得に失敗しました。",
            "destinations": [],
            "show_errors": show_errors,
        })

    results = await get_destination_rates(
        client, params.weight, params.width, params.height, params.depth,
        us_zip=params.us_zip, uk_postcode=params.uk_postcode,
    )
    destinations = [
        {"name": key, "rates": select_display_rates(result), "errors": result.errors}
        for key, result in results.items()
    ]
    return templates.TemplateResponse(request, "partials/rates.html", {
        "error": None,
        "destinations": destinations,
        "show_errors": show_errors,
    })


@router.get("/partials/services", response_class=HTMLResponse)
def services_partial(request: Request):
    return templates.TemplateResponse(request, "partials/services.html", {
        "groups": [
            ("DHL", DHL_SERVICES),
            ("FedEx", FEDEX_SERVICES),
            ("Japan Post", JAPAN_POST_SERVICE_INFO),
        ],
    })
