"""Response schemas for API endpoints."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ModelPriceResponse(BaseModel):
    """Stored model price (USD per million tokens)."""

    model_name: str
    input_price: Decimal
    output_price: Decimal
    provider: str
    total_price: Decimal

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())


class ComparisonRow(BaseModel):
    """One model's converted costs, formatted for display."""

    model_name: str
    provider: str
    input_price: str
    output_price: str
    total_price: str

    model_config = ConfigDict(protected_namespaces=())


class TokenCount(BaseModel):
    """Token count with its spelled-out form."""

    count: int
    words: str


class ComparisonResponse(BaseModel):
    """Price comparison table, highest total first."""

    currency: str
    exchange_rate: Decimal
    rate_source: str
    input_tokens: TokenCount
    output_tokens: TokenCount
    rows: list[ComparisonRow] = Field(default_factory=list)


class CurrencyListResponse(BaseModel):
    """Known currency codes."""

    currencies: list[str]
    total: int


class ExchangeRatesResponse(BaseModel):
    """Session exchange rate table relative to USD."""

    base: str = "USD"
    source: str
    rates: dict[str, Decimal]


class ErrorResponse(BaseModel):
    """Common error envelope."""

    error: str
    detail: str | None = None
    code: str
    request_id: str | None = None
