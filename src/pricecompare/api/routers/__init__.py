"""API routers for endpoint organization."""

from .currencies import router as currencies_router
from .health import router as health_router
from .prices import router as prices_router
from .websocket import router as websocket_router

__all__ = [
    "currencies_router",
    "health_router",
    "prices_router",
    "websocket_router",
]
