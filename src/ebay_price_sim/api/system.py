"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from ..schemas import HealthResponse, ServiceStatus

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health", response_model=HealthResponse)
def health_check():
    from ..main import app_state

    services: list[ServiceStatus] = []
    overall = "ok"
    cached = 0

    # Ship&Co
    shipandco = app_state.get("shipandco")
    if shipandco is None:
        services.append(ServiceStatus(name="shipandco", status="unavailable", detail="not initialized"))
        overall = "degraded"
    elif not shipandco.configured:
        services.append(ServiceStatus(
            name="shipandco", status="degraded", detail="SHIPANDCO_API_KEY not set",
        ))
        overall = "degraded"
    else:
        services.append(ServiceStatus(name="shipandco", status="ok"))

    if shipandco is not None:
        shipandco.cache.prune()
        cached = len(shipandco.cache)

    # Exchange rate
    fx = app_state.get("exchange_rate")
    if fx is None:
        services.append(ServiceStatus(name="exchange_rate", status="unavailable", detail="not initialized"))
    elif fx.last_rate is None:
        services.append(ServiceStatus(name="exchange_rate", status="ok", detail="using fallback rate"))
    else:
        services.append(ServiceStatus(name="exchange_rate", status="ok", detail=f"USD/JPY {fx.last_rate}"))

    return HealthResponse(status=overall, cached_rate_results=cached, services=services)
