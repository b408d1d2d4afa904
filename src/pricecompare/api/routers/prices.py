"""Model price endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from pricecompare.pricing import MAX_WORDS_VALUE

from ..dependencies import Comparison
from ..schemas import ComparisonResponse, ModelPriceInput, ModelPriceResponse
from ..services.comparison_service import DEFAULT_CURRENCY, DEFAULT_TOKENS

router = APIRouter(prefix="/prices", tags=["prices"])

TokenQuery = Query(ge=0, le=MAX_WORDS_VALUE)


@router.get(
    "",
    response_model=list[ModelPriceResponse],
    summary="List model prices",
)
async def list_prices(service: Comparison) -> list[ModelPriceResponse]:
    """List every stored model price in insertion order.

    Args:
        service: Comparison service

    Returns:
        Stored model prices (USD per million tokens)
    """
    records = await service.list_prices()
    return [ModelPriceResponse.model_validate(record, from_attributes=True) for record in records]


@router.get(
    "/comparison",
    response_model=ComparisonResponse,
    summary="Compare model costs",
)
async def compare_prices(
    service: Comparison,
    input_tokens: Annotated[int, TokenQuery] = DEFAULT_TOKENS,
    output_tokens: Annotated[int, TokenQuery] = DEFAULT_TOKENS,
    currency: Annotated[str, Query(min_length=1, max_length=10)] = DEFAULT_CURRENCY,
) -> ComparisonResponse:
    """Compare model costs for a token workload, highest total first.

    Args:
        service: Comparison service
        input_tokens: Input token count
        output_tokens: Output token count
        currency: Target currency code; unknown codes price in USD

    Returns:
        Comparison table
    """
    return await service.compare(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        currency=currency,
    )


@router.post(
    "",
    response_model=ModelPriceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a model price",
)
async def add_price(request: ModelPriceInput, service: Comparison) -> ModelPriceResponse:
    """Add a model price; an existing model with the same name is replaced.

    Args:
        request: Model price to add
        service: Comparison service

    Returns:
        Stored model price
    """
    record = await service.add_model(request)
    return ModelPriceResponse.model_validate(record, from_attributes=True)


@router.put(
    "/{model_name}",
    response_model=ModelPriceResponse,
    summary="Edit a model price",
)
async def edit_price(
    model_name: Annotated[str, Path(min_length=1, max_length=200)],
    request: ModelPriceInput,
    service: Comparison,
) -> ModelPriceResponse:
    """Replace a model's prices and provider.

    Args:
        model_name: Model to edit
        request: Full replacement values
        service: Comparison service

    Returns:
        Stored model price
    """
    record = await service.edit_model(model_name, request)
    return ModelPriceResponse.model_validate(record, from_attributes=True)
