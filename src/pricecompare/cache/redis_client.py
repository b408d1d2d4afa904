"""Async Redis client.

Provides connection pooling and lifecycle management for Redis, which
carries the model price realtime channel.
"""

from __future__ import annotations

from typing import Any

import redis.asyncio as redis
import structlog

from pricecompare.config import CacheSettings

logger = structlog.get_logger()


class RedisClient:
    """Async Redis client wrapper with connection pooling."""

    def __init__(self, redis_url: str, max_connections: int = 20) -> None:
        """Initialize Redis client.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            max_connections: Maximum pool connections
        """
        self.redis_url = redis_url
        self.max_connections = max_connections
        self._pool: redis.ConnectionPool | None = None
        self._client: redis.Redis | None = None

    @classmethod
    def from_settings(cls, settings: CacheSettings) -> RedisClient:
        """Create a client from cache settings."""
        return cls(
            redis_url=settings.redis_url,
            max_connections=settings.redis_max_connections,
        )

    async def connect(self) -> None:
        """Establish connection to Redis."""
        if self._client is not None:
            return

        self._pool = redis.ConnectionPool.from_url(
            self.redis_url,
            decode_responses=True,
            max_connections=self.max_connections,
        )
        self._client = redis.Redis(connection_pool=self._pool)

        # Test connection
        await self._client.ping()
        logger.info("redis_connected", url=self._mask_url(self.redis_url))

    async def close(self) -> None:
        """Close Redis connection and pool."""
        if self._client:
            await self._client.aclose()
            self._client = None
        if self._pool:
            await self._pool.disconnect()
            self._pool = None
        logger.info("redis_disconnected")

    @property
    def client(self) -> redis.Redis:
        """Get Redis client.

        Returns:
            Redis client instance

        Raises:
            RuntimeError: If not connected
        """
        if self._client is None:
            raise RuntimeError("Redis not connected. Call connect() first.")
        return self._client

    @property
    def is_connected(self) -> bool:
        """Check if connected to Redis."""
        return self._client is not None

    async def publish(self, channel: str, message: str) -> int:
        """Publish a message on a pub/sub channel.

        Args:
            channel: Channel name
            message: Serialized message

        Returns:
            Number of subscribers that received the message
        """
        receivers: int = await self.client.publish(channel, message)
        return receivers

    def pubsub(self) -> Any:
        """Create a pub/sub handle on the shared pool."""
        return self.client.pubsub()

    def _mask_url(self, url: str) -> str:
        """Mask password in URL for logging."""
        if "@" in url:
            parts = url.split("@")
            return f"redis://***@{parts[-1]}"
        return url
