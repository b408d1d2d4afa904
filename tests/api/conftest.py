"""API test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pricecompare.api.websocket import PriceFeedManager
from pricecompare.rates import ExchangeRateTable
from pricecompare.store import ModelPriceRecord, PriceStore


@pytest.fixture
def mock_store(sample_records: list[ModelPriceRecord]) -> AsyncMock:
    """Create mock price store returning the sample records."""
    store = AsyncMock(spec=PriceStore)
    store.list_all.return_value = sample_records
    return store


@pytest.fixture
def exchange_rates() -> ExchangeRateTable:
    """Fallback exchange rate table."""
    return ExchangeRateTable.fallback()


@pytest.fixture
def feed_manager() -> PriceFeedManager:
    """Empty price feed manager."""
    return PriceFeedManager()


@pytest.fixture
def app(
    mock_store: AsyncMock,
    exchange_rates: ExchangeRateTable,
    feed_manager: PriceFeedManager,
) -> FastAPI:
    """Create test FastAPI app with startup handles replaced by test doubles."""
    from pricecompare.api.main import create_app

    app = create_app()
    app.state.price_store = mock_store
    app.state.exchange_rates = exchange_rates
    app.state.price_feed = feed_manager
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app, raise_server_exceptions=False)
