"""Exchange rate loading with static fallback."""

from .client import (
    FALLBACK_CURRENCIES,
    FALLBACK_RATES,
    ExchangeRateClient,
    ExchangeRateTable,
    load_exchange_rates,
)
from .exceptions import ExternalRateFetchError

__all__ = [
    "FALLBACK_CURRENCIES",
    "FALLBACK_RATES",
    "ExchangeRateClient",
    "ExchangeRateTable",
    "ExternalRateFetchError",
    "load_exchange_rates",
]
