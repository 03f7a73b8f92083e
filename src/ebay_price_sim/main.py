"""FastAPI application with lifespan-managed rate and exchange clients."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.router import api_router
from .config import settings
from .currency import ExchangeRateClient
from .shipping.cache import RateCache
from .shipping.client import ShipAndCoClient
from .web.views import router as web_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Shared state accessible by API endpoints
app_state: dict = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    rate_cache = RateCache()
    app_state["shipandco"] = ShipAndCoClient(rate_cache)
    if settings.shipandco_enabled:
        logger.info("Ship&Co rates enabled")
    else:
        logger.warning("SHIPANDCO_API_KEY not set; rate lookups will return errors")

    app_state["exchange_rate"] = ExchangeRateClient()

    logger.info("eBay価格シミュレータ started")
    yield

    # Shutdown
    await app_state["shipandco"].close()
    await app_state["exchange_rate"].close()
    app_state.clear()
    logger.info("eBay価格シミュレータ stopped")


app = FastAPI(
    title="eBay価格シミュレータ",
    description="eBayの販売価格と利益、US/UK向け送料を試算するツール",
    version="0.1.0",
    lifespan=lifespan,
)
app.include_router(api_router)
app.include_router(web_router)
