"""Database models."""

from .base import Base
from .model_price import ModelPrice

__all__ = ["Base", "ModelPrice"]
