"""Redis connection management for the realtime channel."""

from .redis_client import RedisClient

__all__ = ["RedisClient"]
