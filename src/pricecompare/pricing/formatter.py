"""Display formatting for prices and token counts."""

from decimal import ROUND_HALF_UP, Decimal

PRICE_QUANTUM = Decimal("0.001")

_ONES = ("", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine")
_TEENS = (
    "ten",
    "eleven",
    "twelve",
    "thirteen",
    "fourteen",
    "fifteen",
    "sixteen",
    "seventeen",
    "eighteen",
    "nineteen",
)
_TENS = ("", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety")

# Short-scale groups, largest first
_SCALES = (
    (10**12, "trillion"),
    (10**9, "billion"),
    (10**6, "million"),
    (10**3, "thousand"),
)

MAX_WORDS_VALUE = 10**15 - 1


def round_price(value: Decimal) -> Decimal:
    """Round a price to the displayed precision (3 places, half-up).

    Args:
        value: Raw price

    Returns:
        Price as it is shown to the user
    """
    return Decimal(value).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


def format_price(value: Decimal) -> str:
    """Render a price as a compact decimal string.

    Rounds to 3 fractional digits, then drops trailing zeros and a dangling
    decimal point, e.g. ``0.1200 -> "0.12"`` and ``3.000 -> "3"``.

    Args:
        value: Price to render

    Returns:
        Decimal literal with at most 3 fractional digits
    """
    if value == 0:
        return "0"

    text = f"{round_price(value):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")

    # Sub-quantum negatives round to "-0"
    if text == "-0":
        return "0"
    return text


def _below_thousand(n: int) -> list[str]:
    words: list[str] = []
    if n >= 100:
        words += [_ONES[n // 100], "hundred"]
        n %= 100
    if n >= 20:
        words.append(_TENS[n // 10])
        n %= 10
    elif n >= 10:
        words.append(_TEENS[n - 10])
        n = 0
    if n:
        words.append(_ONES[n])
    return words


def number_to_words(n: int) -> str:
    """Spell out a non-negative integer in English.

    Uses short-scale grouping up to the trillions, single-spaced and without
    hyphens: ``1234 -> "one thousand two hundred thirty four"``.

    Args:
        n: Value between 0 and 999_999_999_999_999

    Returns:
        English phrase

    Raises:
        ValueError: If n is negative or too large to spell
    """
    if n < 0:
        raise ValueError(f"Cannot spell negative number: {n}")
    if n > MAX_WORDS_VALUE:
        raise ValueError(f"Number too large to spell: {n}")
    if n == 0:
        return "zero"

    words: list[str] = []
    for size, name in _SCALES:
        if n >= size:
            words += _below_thousand(n // size)
            words.append(name)
            n %= size
    words += _below_thousand(n)
    return " ".join(words)
