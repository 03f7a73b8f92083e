"""Aggregate all API routers."""

from fastapi import APIRouter

from . import pricing, rates, system

api_router = APIRouter()
api_router.include_router(rates.router)
api_router.include_router(pricing.router)
api_router.include_router(system.router)
