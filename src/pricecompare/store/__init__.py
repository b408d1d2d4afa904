"""Model price data access and realtime notifications."""

from .exceptions import DataAccessError, EmptyResultError, PriceStoreError
from .price_store import PriceStore
from .schemas import InsertEvent, ModelPriceInput, ModelPriceRecord
from .subscription import InsertHandler, InsertSubscription

__all__ = [
    "DataAccessError",
    "EmptyResultError",
    "InsertEvent",
    "InsertHandler",
    "InsertSubscription",
    "ModelPriceInput",
    "ModelPriceRecord",
    "PriceStore",
    "PriceStoreError",
]
