"""Application lifespan tests."""

from collections.abc import Iterator
from dataclasses import dataclass
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI

from pricecompare.api.main import lifespan
from pricecompare.rates import ExchangeRateTable
from pricecompare.store import DataAccessError


@dataclass
class Handles:
    """Patched long-lived handles built by the lifespan."""

    db: AsyncMock
    redis_client: AsyncMock
    store: AsyncMock
    subscription: AsyncMock
    load_exchange_rates: AsyncMock


@pytest.fixture
def handles(mock_settings: None) -> Iterator[Handles]:
    """Replace the lifespan's backends with mocks."""
    db = AsyncMock()
    redis_client = AsyncMock()
    subscription = AsyncMock(failure=None, closed=False)
    store = AsyncMock()
    store.subscribe_to_inserts.return_value = subscription
    rates = AsyncMock(return_value=ExchangeRateTable.fallback())

    with (
        patch("pricecompare.api.main.DatabaseSessionManager") as db_cls,
        patch("pricecompare.api.main.RedisClient") as redis_cls,
        patch("pricecompare.api.main.PriceStore", return_value=store),
        patch("pricecompare.api.main.load_exchange_rates", rates),
    ):
        db_cls.from_settings.return_value = db
        redis_cls.from_settings.return_value = redis_client
        yield Handles(db, redis_client, store, subscription, rates)


class TestLifespan:
    """Tests for startup and shutdown of the long-lived handles."""

    async def test_startup_and_shutdown(self, handles: Handles) -> None:
        app = FastAPI()

        async with lifespan(app):
            assert app.state.price_store is handles.store
            assert app.state.price_subscription is handles.subscription
            assert app.state.exchange_rates.source == "fallback"
            handles.db.close.assert_not_called()

        handles.subscription.unsubscribe.assert_awaited_once()
        handles.redis_client.close.assert_awaited_once()
        handles.db.close.assert_awaited_once()

    async def test_rate_load_failure_releases_backends(self, handles: Handles) -> None:
        handles.load_exchange_rates.side_effect = RuntimeError("rates unavailable")

        with pytest.raises(RuntimeError, match="rates unavailable"):
            async with lifespan(FastAPI()):
                pass

        handles.store.subscribe_to_inserts.assert_not_called()
        handles.redis_client.close.assert_awaited_once()
        handles.db.close.assert_awaited_once()

    async def test_subscribe_failure_releases_backends(self, handles: Handles) -> None:
        handles.store.subscribe_to_inserts.side_effect = DataAccessError("subscribe")

        with pytest.raises(DataAccessError):
            async with lifespan(FastAPI()):
                pass

        handles.subscription.unsubscribe.assert_not_called()
        handles.redis_client.close.assert_awaited_once()
        handles.db.close.assert_awaited_once()

    async def test_redis_connect_failure_closes_database(self, handles: Handles) -> None:
        handles.redis_client.connect.side_effect = ConnectionError("redis down")

        with pytest.raises(ConnectionError):
            async with lifespan(FastAPI()):
                pass

        handles.db.close.assert_awaited_once()

    async def test_unsubscribe_failure_still_closes(self, handles: Handles) -> None:
        handles.subscription.unsubscribe.side_effect = RuntimeError("pubsub gone")

        with pytest.raises(RuntimeError, match="pubsub gone"):
            async with lifespan(FastAPI()):
                pass

        handles.redis_client.close.assert_awaited_once()
        handles.db.close.assert_awaited_once()
