"""Price comparison service.

Derives the comparison table from the stored records and the session's
exchange rates, and routes add/edit actions to the store.
"""

import structlog

from pricecompare.pricing import number_to_words, price_line, sort_by_total
from pricecompare.rates import ExchangeRateTable
from pricecompare.store import ModelPriceInput, ModelPriceRecord, PriceStore

from ..schemas.responses import ComparisonResponse, ComparisonRow, TokenCount

logger = structlog.get_logger()

DEFAULT_TOKENS = 1_000_000
DEFAULT_CURRENCY = "USD"


class ComparisonService:
    """Builds comparison tables and forwards writes to the price store."""

    def __init__(self, store: PriceStore, rates: ExchangeRateTable) -> None:
        """Initialize comparison service.

        Args:
            store: Price store
            rates: Session exchange rate table
        """
        self.store = store
        self.rates = rates

    async def list_prices(self) -> list[ModelPriceRecord]:
        """Stored prices in insertion order."""
        return await self.store.list_all()

    async def compare(
        self,
        input_tokens: int = DEFAULT_TOKENS,
        output_tokens: int = DEFAULT_TOKENS,
        currency: str = DEFAULT_CURRENCY,
    ) -> ComparisonResponse:
        """Build the comparison table, highest raw total first.

        Args:
            input_tokens: Input token count
            output_tokens: Output token count
            currency: Target currency code; unknown codes price in USD

        Returns:
            Comparison table with display strings
        """
        exchange_rate = self.rates.rate_for(currency)
        records = sort_by_total(await self.store.list_all())

        rows = []
        for record in records:
            input_price, output_price, total = price_line(
                record, input_tokens, output_tokens, exchange_rate
            )
            rows.append(
                ComparisonRow(
                    model_name=record.model_name,
                    provider=record.provider,
                    input_price=input_price,
                    output_price=output_price,
                    total_price=total,
                )
            )

        logger.debug(
            "comparison_built",
            currency=currency,
            exchange_rate=str(exchange_rate),
            row_count=len(rows),
        )

        return ComparisonResponse(
            currency=currency,
            exchange_rate=exchange_rate,
            rate_source=self.rates.source,
            input_tokens=TokenCount(count=input_tokens, words=number_to_words(input_tokens)),
            output_tokens=TokenCount(count=output_tokens, words=number_to_words(output_tokens)),
            rows=rows,
        )

    async def add_model(self, model: ModelPriceInput) -> ModelPriceRecord:
        """Add a model price (replaces an existing one with the same name)."""
        return await self.store.upsert(model)

    async def edit_model(self, model_name: str, model: ModelPriceInput) -> ModelPriceRecord:
        """Replace the prices and provider of a model.

        The path name wins over any name in the body.
        """
        return await self.store.upsert(model.model_copy(update={"name": model_name}))
