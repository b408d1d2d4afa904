"""Repository layer for database access."""

from .base import BaseRepository
from .model_price_repo import ModelPriceRepository

__all__ = ["BaseRepository", "ModelPriceRepository"]
