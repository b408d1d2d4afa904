"""WebSocket message schemas and types."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class WSMessageType(StrEnum):
    """WebSocket message types."""

    # Client -> Server
    PING = "ping"

    # Server -> Client
    CONNECTED = "connected"
    PONG = "pong"
    PRICE_INSERTED = "price_inserted"
    ERROR = "error"


class WSMessage(BaseModel):
    """WebSocket message envelope."""

    type: WSMessageType
    payload: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
