"""Database package for model price persistence."""

from .models import Base, ModelPrice
from .repository import ModelPriceRepository
from .session import DatabaseSessionManager

__all__ = [
    "Base",
    "DatabaseSessionManager",
    "ModelPrice",
    "ModelPriceRepository",
]
