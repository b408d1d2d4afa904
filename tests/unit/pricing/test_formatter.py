"""Price and token-count formatting tests."""

from decimal import Decimal

import pytest

from pricecompare.pricing import MAX_WORDS_VALUE, format_price, number_to_words, round_price


class TestFormatPrice:
    """Tests for format_price."""

    def test_zero(self) -> None:
        assert format_price(Decimal("0")) == "0"
        assert format_price(Decimal("0.000000")) == "0"

    def test_drops_trailing_zeros(self) -> None:
        assert format_price(Decimal("0.1200")) == "0.12"

    def test_drops_dangling_point(self) -> None:
        assert format_price(Decimal("3.000")) == "3"
        assert format_price(Decimal("10")) == "10"

    def test_rounds_half_up_to_three_places(self) -> None:
        assert format_price(Decimal("1.2345")) == "1.235"
        assert format_price(Decimal("0.0005")) == "0.001"
        assert format_price(Decimal("2.0004")) == "2"

    def test_sub_quantum_value_renders_zero(self) -> None:
        assert format_price(Decimal("0.0004")) == "0"
        assert format_price(Decimal("-0.0004")) == "0"

    def test_negative(self) -> None:
        assert format_price(Decimal("-1.5")) == "-1.5"

    def test_large_value_keeps_integer_digits(self) -> None:
        assert format_price(Decimal("1000000")) == "1000000"

    def test_never_more_than_three_fraction_digits(self) -> None:
        for raw in ("0.123456", "7.77777", "12.0001", "99.9999"):
            text = format_price(Decimal(raw))
            if "." in text:
                assert len(text.split(".")[1]) <= 3
                assert not text.endswith("0")


class TestRoundPrice:
    """Tests for round_price."""

    def test_quantizes(self) -> None:
        assert round_price(Decimal("0.0085")) == Decimal("0.009")
        assert round_price(Decimal("0.00849")) == Decimal("0.008")


class TestNumberToWords:
    """Tests for number_to_words."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "zero"),
            (7, "seven"),
            (13, "thirteen"),
            (20, "twenty"),
            (45, "forty five"),
            (100, "one hundred"),
            (110, "one hundred ten"),
            (1000, "one thousand"),
            (1234, "one thousand two hundred thirty four"),
            (1_000_000, "one million"),
            (1_000_001, "one million one"),
            (2_000_000_000, "two billion"),
            (10**12, "one trillion"),
        ],
    )
    def test_spells_value(self, value: int, expected: str) -> None:
        assert number_to_words(value) == expected

    def test_largest_value(self) -> None:
        words = number_to_words(MAX_WORDS_VALUE)
        assert words.startswith("nine hundred ninety nine trillion")
        assert words.endswith("nine hundred ninety nine")

    def test_single_spaced(self) -> None:
        for value in (0, 5, 19, 100, 101, 1010, 20_000, 1_000_100, 300_000_000_021):
            words = number_to_words(value)
            assert "  " not in words
            assert words == words.strip()

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            number_to_words(-1)

    def test_too_large_rejected(self) -> None:
        with pytest.raises(ValueError, match="too large"):
            number_to_words(MAX_WORDS_VALUE + 1)
