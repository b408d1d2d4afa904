"""Currency endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query

from ..dependencies import Rates
from ..schemas import CurrencyListResponse, ExchangeRatesResponse

router = APIRouter(prefix="/currencies", tags=["currencies"])


@router.get(
    "",
    response_model=CurrencyListResponse,
    summary="List currencies",
)
async def list_currencies(
    rates: Rates,
    search: Annotated[str | None, Query(max_length=10)] = None,
) -> CurrencyListResponse:
    """List known currency codes, optionally filtered by substring.

    Args:
        rates: Session exchange rate table
        search: Case-insensitive substring filter

    Returns:
        Matching currency codes
    """
    currencies = rates.search(search) if search else list(rates.currencies)
    return CurrencyListResponse(currencies=currencies, total=len(currencies))


@router.get(
    "/rates",
    response_model=ExchangeRatesResponse,
    summary="Get exchange rates",
)
async def get_rates(rates: Rates) -> ExchangeRatesResponse:
    """Return the session's USD-relative exchange rates."""
    return ExchangeRatesResponse(source=rates.source, rates=dict(rates.rates))
