"""Price store record and event schemas."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ModelPriceInput(BaseModel):
    """Write model for adding or editing a model price (full replace)."""

    name: str = Field(min_length=1, max_length=200, description="Model name")
    input: Decimal = Field(
        ge=0, max_digits=12, decimal_places=6, description="Input price per million tokens (USD)"
    )
    output: Decimal = Field(
        ge=0, max_digits=12, decimal_places=6, description="Output price per million tokens (USD)"
    )
    provider: str = Field(min_length=1, max_length=100, description="Provider label")


class ModelPriceRecord(BaseModel):
    """Model price as read from the backend."""

    model_name: str
    input_price: Decimal
    output_price: Decimal
    provider: str

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_price(self) -> Decimal:
        """Raw USD total per million tokens, used for ordering."""
        return self.input_price + self.output_price


class InsertEvent(BaseModel):
    """Notification that a new model price row was inserted."""

    event: Literal["INSERT"] = "INSERT"
    table: str = "ai_model_prices"
    record: ModelPriceRecord
    committed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
