"""Health check endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    rate_source: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check API health status."""
    return HealthResponse(status="healthy")


@router.get("/ready", response_model=HealthResponse)
async def readiness_check(request: Request) -> HealthResponse | JSONResponse:
    """Check that startup finished wiring the store and rate table, and
    that the insert subscription is still live.

    Returns:
        Readiness status, 503 while startup is incomplete or after the
        insert subscription has failed closed
    """
    state = request.app.state
    if getattr(state, "price_store", None) is None or getattr(state, "exchange_rates", None) is None:
        return JSONResponse(status_code=503, content={"status": "starting"})

    subscription = getattr(state, "price_subscription", None)
    if subscription is not None and (subscription.failure is not None or subscription.closed):
        content = {"status": "degraded", "rate_source": state.exchange_rates.source}
        return JSONResponse(status_code=503, content=content)

    return HealthResponse(status="ready", rate_source=state.exchange_rates.source)
