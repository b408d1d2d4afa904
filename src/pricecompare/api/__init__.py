"""FastAPI application module.

Provides the price comparison REST API and the realtime price feed.
"""

from .main import create_app

__all__ = ["create_app"]
