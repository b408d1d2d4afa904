"""Price computation and formatting."""

from .calculator import (
    DEFAULT_EXCHANGE_RATE,
    TOKENS_PER_UNIT,
    PricedModel,
    price_line,
    resolve_exchange_rate,
    sort_by_total,
    total_cost,
    total_price,
    unit_cost,
)
from .formatter import MAX_WORDS_VALUE, format_price, number_to_words, round_price

__all__ = [
    "DEFAULT_EXCHANGE_RATE",
    "MAX_WORDS_VALUE",
    "TOKENS_PER_UNIT",
    "PricedModel",
    "format_price",
    "number_to_words",
    "price_line",
    "resolve_exchange_rate",
    "round_price",
    "sort_by_total",
    "total_cost",
    "total_price",
    "unit_cost",
]
