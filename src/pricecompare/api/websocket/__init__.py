"""WebSocket price feed."""

from .manager import Connection, PriceFeedManager

__all__ = ["Connection", "PriceFeedManager"]
