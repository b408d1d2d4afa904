"""Exchange rate provider client.

Fetches the supported currency list and latest USD-based rates once at
startup. Any failure degrades to a static three-currency table.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any

import httpx
import structlog

from pricecompare.config import ExchangeRateSettings
from pricecompare.pricing import resolve_exchange_rate

from .exceptions import ExternalRateFetchError

logger = structlog.get_logger()

FALLBACK_CURRENCIES: tuple[str, ...] = ("USD", "EUR", "GBP")
FALLBACK_RATES: Mapping[str, Decimal] = MappingProxyType(
    {"USD": Decimal("1"), "EUR": Decimal("0.85"), "GBP": Decimal("0.75")}
)


@dataclass(frozen=True)
class ExchangeRateTable:
    """Immutable currency list and USD-relative rates for one session.

    Attributes:
        currencies: Known currency codes, in provider order
        rates: Currency code to multiplier relative to USD
        source: "live" when fetched, "fallback" for the static table
    """

    currencies: tuple[str, ...]
    rates: Mapping[str, Decimal] = field(default_factory=dict)
    source: str = "live"

    def __post_init__(self) -> None:
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    @classmethod
    def fallback(cls) -> ExchangeRateTable:
        """Static table used when the provider is unavailable."""
        return cls(currencies=FALLBACK_CURRENCIES, rates=FALLBACK_RATES, source="fallback")

    def rate_for(self, currency: str) -> Decimal:
        """Multiplier for a currency, 1 when unknown."""
        return resolve_exchange_rate(self.rates, currency)

    def search(self, query: str) -> list[str]:
        """Filter currency codes by case-insensitive substring."""
        needle = query.lower()
        return [code for code in self.currencies if needle in code.lower()]


def _parse_rates(raw: Mapping[str, Any]) -> dict[str, Decimal]:
    try:
        return {code: Decimal(str(value)) for code, value in raw.items()}
    except (InvalidOperation, TypeError) as e:
        raise ExternalRateFetchError(f"Invalid rate value: {e}") from e


class ExchangeRateClient:
    """Async client for the exchange rate provider."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            api_key: Provider API key, sent as the ``apikey`` header
            base_url: Provider base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used in tests)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def fetch(self) -> ExchangeRateTable:
        """Fetch currency symbols and latest USD rates.

        Returns:
            Live exchange rate table

        Raises:
            ExternalRateFetchError: On transport errors, non-success status,
                malformed JSON or missing fields
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers={"apikey": self.api_key},
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            try:
                symbols_response, rates_response = await asyncio.gather(
                    client.get("/symbols"),
                    client.get("/latest", params={"base": "USD"}),
                )
            except httpx.HTTPError as e:
                raise ExternalRateFetchError(f"Request failed: {e}") from e

        if not symbols_response.is_success or not rates_response.is_success:
            raise ExternalRateFetchError(
                f"Unexpected status: symbols={symbols_response.status_code}, "
                f"latest={rates_response.status_code}"
            )

        try:
            symbols_data = symbols_response.json()
            rates_data = rates_response.json()
        except ValueError as e:
            raise ExternalRateFetchError(f"Invalid JSON: {e}") from e

        symbols = symbols_data.get("symbols") if isinstance(symbols_data, dict) else None
        rates = rates_data.get("rates") if isinstance(rates_data, dict) else None
        if not symbols or not rates:
            raise ExternalRateFetchError("Invalid data received from provider")

        return ExchangeRateTable(
            currencies=tuple(symbols.keys()),
            rates=_parse_rates(rates),
            source="live",
        )


async def load_exchange_rates(
    settings: ExchangeRateSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ExchangeRateTable:
    """Load the session's exchange rate table.

    Makes a single best-effort fetch; falls back to static rates when no API
    key is configured or the fetch fails.

    Args:
        settings: Exchange rate settings
        transport: Optional httpx transport (used in tests)

    Returns:
        Live or fallback exchange rate table
    """
    if not settings.api_key:
        logger.warning("exchange_rates_api_key_missing")
        return ExchangeRateTable.fallback()

    client = ExchangeRateClient(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout_seconds,
        transport=transport,
    )
    try:
        table = await client.fetch()
    except ExternalRateFetchError as e:
        logger.error("exchange_rates_fallback", reason=e.reason)
        return ExchangeRateTable.fallback()

    logger.info(
        "exchange_rates_loaded",
        currency_count=len(table.currencies),
        rate_count=len(table.rates),
    )
    return table
