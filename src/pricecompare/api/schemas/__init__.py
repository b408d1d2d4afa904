"""Pydantic schemas for API request/response validation."""

from pricecompare.store.schemas import ModelPriceInput

from .responses import (
    ComparisonResponse,
    ComparisonRow,
    CurrencyListResponse,
    ErrorResponse,
    ExchangeRatesResponse,
    ModelPriceResponse,
    TokenCount,
)
from .websocket import WSMessage, WSMessageType

__all__ = [
    # Requests
    "ModelPriceInput",
    # Responses
    "ComparisonResponse",
    "ComparisonRow",
    "CurrencyListResponse",
    "ErrorResponse",
    "ExchangeRatesResponse",
    "ModelPriceResponse",
    "TokenCount",
    # WebSocket
    "WSMessage",
    "WSMessageType",
]
