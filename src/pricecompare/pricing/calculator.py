"""Token-to-cost conversion and display ordering."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Protocol, TypeVar

from .formatter import format_price, round_price

TOKENS_PER_UNIT = 1_000_000
DEFAULT_EXCHANGE_RATE = Decimal("1")


class PricedModel(Protocol):
    """Anything carrying per-million-token prices."""

    @property
    def input_price(self) -> Decimal: ...

    @property
    def output_price(self) -> Decimal: ...


P = TypeVar("P", bound=PricedModel)


def resolve_exchange_rate(rates: Mapping[str, Decimal], currency: str) -> Decimal:
    """Look up the USD multiplier for a currency.

    Unknown currencies fall back to 1 (prices stay in USD).
    """
    return rates.get(currency, DEFAULT_EXCHANGE_RATE)


def unit_cost(
    rate_per_million: Decimal,
    token_count: int,
    exchange_rate: Decimal = DEFAULT_EXCHANGE_RATE,
) -> Decimal:
    """Cost of processing a number of tokens.

    Args:
        rate_per_million: Price per one million tokens (USD)
        token_count: Number of tokens
        exchange_rate: Multiplier from USD to the target currency

    Returns:
        Unrounded cost in the target currency

    Raises:
        ValueError: If token_count is negative
    """
    if token_count < 0:
        raise ValueError(f"token_count must be non-negative, got {token_count}")
    return Decimal(rate_per_million) * token_count * Decimal(exchange_rate) / TOKENS_PER_UNIT


def total_cost(input_cost: Decimal, output_cost: Decimal) -> Decimal:
    """Sum two line items as they are displayed.

    Each operand is rounded to display precision before summing so the total
    always equals the sum of the two visible line items.
    """
    return round_price(input_cost) + round_price(output_cost)


def total_price(record: PricedModel) -> Decimal:
    """Raw USD total per million tokens, used for ordering."""
    return record.input_price + record.output_price


def sort_by_total(records: Iterable[P]) -> list[P]:
    """Order records by descending raw total, keeping fetch order on ties."""
    return sorted(records, key=total_price, reverse=True)


def price_line(
    record: PricedModel,
    input_tokens: int,
    output_tokens: int,
    exchange_rate: Decimal = DEFAULT_EXCHANGE_RATE,
) -> tuple[str, str, str]:
    """Display strings for one record: input, output and total cost."""
    input_cost = unit_cost(record.input_price, input_tokens, exchange_rate)
    output_cost = unit_cost(record.output_price, output_tokens, exchange_rate)
    return (
        format_price(input_cost),
        format_price(output_cost),
        format_price(total_cost(input_cost, output_cost)),
    )
