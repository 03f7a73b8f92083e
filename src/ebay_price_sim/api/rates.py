"""Shipping rate endpoints (US / UK via Ship&Co)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..schemas import DestinationRatesResponse, RatesRequest, ServiceInfoResponse
from ..shipping.catalog import all_services
from ..shipping.client import ShipAndCoClient
from ..shipping.service import get_destination_rates

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["rates"])

INVALID_BODY_MESSAGE = "リクエストが不正です。"
INVALID_DIMENSIONS_MESSAGE = "重量・サイズの入力が不正です。"


def _get_rates_client() -> ShipAndCoClient:
    from ..main import app_state

    client = app_state.get("shipandco")
    if client is None:
        raise HTTPException(503, "Rate client is not initialized")
    return client


@router.post("/rates", response_model=DestinationRatesResponse)
async def post_rates(request: Request):
    """Fetch filtered US and UK rate quotes for one package."""
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return JSONResponse({"error": INVALID_BODY_MESSAGE}, status_code=400)

    try:
        params = RatesRequest.model_validate(body)
    except ValidationError as e:
        logger.info("Rejected rate request: %s", e.errors(include_url=False))
        return JSONResponse({"error": INVALID_DIMENSIONS_MESSAGE}, status_code=400)

    client = _get_rates_client()
    results = await get_destination_rates(
        client,
        weight=params.weight,
        width=params.width,
        height=params.height,
        depth=params.depth,
        us_zip=params.us_zip,
        uk_postcode=params.uk_postcode,
    )
    return {key: result.to_dict() for key, result in results.items()}


@router.get("/shipping/services", response_model=list[ServiceInfoResponse])
def list_services():
    """Carrier services the calculator knows how to label."""
    return [
        ServiceInfoResponse(
            carrier=info.carrier, code=info.code, label=info.label, description=info.description,
        )
        for info in all_services()
    ]
