"""FastAPI dependencies for dependency injection.

Long-lived handles are created once in the application lifespan and kept
on ``app.state``; these dependencies hand them to the routes.
"""

from typing import Annotated

from fastapi import Depends
from starlette.requests import HTTPConnection

from pricecompare.rates import ExchangeRateTable
from pricecompare.store import PriceStore

from .services import ComparisonService
from .websocket import PriceFeedManager


def get_price_store(conn: HTTPConnection) -> PriceStore:
    """Price store created at startup."""
    store: PriceStore = conn.app.state.price_store
    return store


def get_exchange_rates(conn: HTTPConnection) -> ExchangeRateTable:
    """Exchange rate table loaded at startup."""
    rates: ExchangeRateTable = conn.app.state.exchange_rates
    return rates


def get_feed_manager(conn: HTTPConnection) -> PriceFeedManager:
    """WebSocket price feed manager."""
    manager: PriceFeedManager = conn.app.state.price_feed
    return manager


def get_comparison_service(
    store: PriceStore = Depends(get_price_store),
    rates: ExchangeRateTable = Depends(get_exchange_rates),
) -> ComparisonService:
    """Comparison service dependency.

    Args:
        store: Price store from DI
        rates: Exchange rates from DI

    Returns:
        ComparisonService instance
    """
    return ComparisonService(store, rates)


# Type aliases for cleaner route signatures
Comparison = Annotated[ComparisonService, Depends(get_comparison_service)]
Rates = Annotated[ExchangeRateTable, Depends(get_exchange_rates)]
FeedManager = Annotated[PriceFeedManager, Depends(get_feed_manager)]
