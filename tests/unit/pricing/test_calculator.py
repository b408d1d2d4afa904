"""Cost calculation and ordering tests."""

from dataclasses import dataclass
from decimal import Decimal

import pytest

from pricecompare.pricing import (
    price_line,
    resolve_exchange_rate,
    sort_by_total,
    total_cost,
    total_price,
    unit_cost,
)
from pricecompare.rates import FALLBACK_RATES


@dataclass
class Priced:
    """Minimal priced record."""

    name: str
    input_price: Decimal
    output_price: Decimal


class TestUnitCost:
    """Tests for unit_cost."""

    def test_one_million_tokens_costs_the_rate(self) -> None:
        assert unit_cost(Decimal("10"), 1_000_000) == Decimal("10")

    def test_applies_exchange_rate(self) -> None:
        assert unit_cost(Decimal("2.5"), 500_000, Decimal("0.85")) == Decimal("1.0625")

    def test_zero_tokens(self) -> None:
        assert unit_cost(Decimal("30"), 0) == 0

    def test_negative_tokens_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            unit_cost(Decimal("1"), -1)


class TestTotalCost:
    """Tests for total_cost."""

    def test_rounds_each_operand_before_summing(self) -> None:
        # Raw sum 0.0008 would display as 0.001
        assert total_cost(Decimal("0.0004"), Decimal("0.0004")) == Decimal("0")

    def test_total_matches_visible_line_items(self) -> None:
        # Raw sum 0.003; displayed items are 0.002 each
        assert total_cost(Decimal("0.0015"), Decimal("0.0015")) == Decimal("0.004")


class TestExchangeRate:
    """Tests for resolve_exchange_rate."""

    def test_known_currency(self) -> None:
        assert resolve_exchange_rate(FALLBACK_RATES, "EUR") == Decimal("0.85")

    def test_unknown_currency_is_one(self) -> None:
        assert resolve_exchange_rate(FALLBACK_RATES, "JPY") == Decimal("1")


class TestSortByTotal:
    """Tests for sort_by_total."""

    def test_descending_and_stable(self) -> None:
        records = [
            Priced("a", Decimal("2"), Decimal("3")),
            Priced("b", Decimal("0.5"), Decimal("0.5")),
            Priced("c", Decimal("4"), Decimal("5")),
            Priced("d", Decimal("9"), Decimal("0")),
        ]

        ordered = sort_by_total(records)

        assert [r.name for r in ordered] == ["c", "d", "a", "b"]

    def test_does_not_mutate_input(self) -> None:
        records = [Priced("a", Decimal("1"), Decimal("1")), Priced("b", Decimal("5"), Decimal("5"))]

        sort_by_total(records)

        assert [r.name for r in records] == ["a", "b"]

    def test_total_price_is_raw_sum(self) -> None:
        assert total_price(Priced("a", Decimal("0.25"), Decimal("1.25"))) == Decimal("1.5")


class TestPriceLine:
    """Tests for price_line."""

    def test_formats_converted_costs(self) -> None:
        record = Priced("frontier", Decimal("10"), Decimal("30"))

        assert price_line(record, 1000, 1000, Decimal("0.85")) == ("0.009", "0.026", "0.035")

    def test_default_workload_in_usd(self) -> None:
        record = Priced("frontier", Decimal("10"), Decimal("30"))

        assert price_line(record, 1_000_000, 1_000_000) == ("10", "30", "40")


class TestUnitCostProperties:
    """Arithmetic properties of unit_cost."""

    @pytest.mark.parametrize(
        ("rate", "tokens", "exchange"),
        [("3", 250_000, "0.75"), ("0.15", 1_234_567, "1"), ("60", 1, "151.3")],
    )
    def test_matches_formula(self, rate: str, tokens: int, exchange: str) -> None:
        expected = Decimal(rate) * tokens * Decimal(exchange) / 1_000_000
        assert unit_cost(Decimal(rate), tokens, Decimal(exchange)) == expected

    def test_zero_exchange_rate(self) -> None:
        assert unit_cost(Decimal("5"), 1000, Decimal("0")) == 0
