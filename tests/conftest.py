"""
Pytest configuration and fixtures
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Any

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from pricecompare.config import RealtimeSettings
from pricecompare.store import ModelPriceRecord


class FakePubSub:
    """In-memory stand-in for a redis.asyncio PubSub handle."""

    def __init__(self, broker: FakeRedisClient) -> None:
        self._broker = broker
        self._queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self.channels: set[str] = set()
        self.closed = False

    async def subscribe(self, *channels: str) -> None:
        self._broker.subscribe_calls += 1
        if self._broker.fail_subscribes > 0:
            self._broker.fail_subscribes -= 1
            raise RedisConnectionError("subscribe refused")
        self.channels.update(channels)
        self._broker.pubsubs.append(self)

    async def unsubscribe(self, *channels: str) -> None:
        self.channels.difference_update(channels or set(self.channels))

    async def get_message(
        self,
        ignore_subscribe_messages: bool = False,
        timeout: float | None = 0.0,
    ) -> dict[str, Any] | None:
        if self._broker.fail_reads > 0:
            self._broker.fail_reads -= 1
            raise RedisConnectionError("connection lost")
        try:
            return await asyncio.wait_for(self._queue.get(), timeout)
        except TimeoutError:
            return None

    async def aclose(self) -> None:
        self.closed = True
        self._broker.close_calls += 1
        if self in self._broker.pubsubs:
            self._broker.pubsubs.remove(self)

    def deliver(self, message: dict[str, Any]) -> None:
        self._queue.put_nowait(message)


class FakeRedisClient:
    """In-memory stand-in for RedisClient's pub/sub surface."""

    def __init__(self) -> None:
        self.pubsubs: list[FakePubSub] = []
        self.published: list[tuple[str, str]] = []
        self.subscribe_calls = 0
        self.close_calls = 0
        self.fail_subscribes = 0
        self.fail_reads = 0
        self.fail_publish = False

    async def publish(self, channel: str, message: str) -> int:
        if self.fail_publish:
            raise RedisConnectionError("publish failed")
        self.published.append((channel, message))
        receivers = 0
        for pubsub in list(self.pubsubs):
            if channel in pubsub.channels:
                pubsub.deliver({"type": "message", "channel": channel, "data": message})
                receivers += 1
        return receivers

    def pubsub(self) -> FakePubSub:
        return FakePubSub(self)


@pytest.fixture
def fake_redis() -> FakeRedisClient:
    """In-memory Redis pub/sub double."""
    return FakeRedisClient()


@pytest.fixture
def realtime_settings() -> RealtimeSettings:
    """Realtime settings with zero backoff and a short poll."""
    return RealtimeSettings(
        reconnect_attempts=3,
        reconnect_min_wait=0,
        reconnect_max_wait=0,
        poll_timeout=0.01,
    )


@pytest.fixture
def sample_records() -> list[ModelPriceRecord]:
    """Two records in fetch order, cheaper first."""
    return [
        ModelPriceRecord(
            model_name="budget-model",
            input_price=Decimal("0.25"),
            output_price=Decimal("1.25"),
            provider="Acme",
        ),
        ModelPriceRecord(
            model_name="frontier-model",
            input_price=Decimal("10"),
            output_price=Decimal("30"),
            provider="OpenAI",
        ),
    ]


@pytest.fixture
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Point settings at local test backends."""
    monkeypatch.setenv("DB_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("CACHE_REDIS_URL", "redis://localhost:6379/15")
    monkeypatch.delenv("EXCHANGE_RATES_API_KEY", raising=False)
