"""Model price repository."""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.model_price import ModelPrice
from .base import BaseRepository


class ModelPriceRepository(BaseRepository[ModelPrice]):
    """Repository for ModelPrice operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize model price repository.

        Args:
            session: Database session
        """
        super().__init__(ModelPrice, session)

    async def get_all_model_prices(self) -> list[ModelPrice]:
        """Get every model price in insertion order.

        Returns:
            List of model prices
        """
        return await self.list_all()

    async def get_by_name(self, model_name: str) -> ModelPrice | None:
        """Get model price by exact (case-sensitive) name.

        Args:
            model_name: Model name

        Returns:
            Model price if found, None otherwise
        """
        stmt = select(ModelPrice).where(ModelPrice.model_name == model_name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_model_price(
        self,
        p_model_name: str,
        p_input_price: Decimal,
        p_output_price: Decimal,
        p_provider: str,
    ) -> ModelPrice | None:
        """Insert a model price or replace the one with the same name.

        Issues a single INSERT ... ON CONFLICT (model_name) DO UPDATE, so
        concurrent writers never create duplicates; the last write wins.

        Args:
            p_model_name: Model name (conflict key)
            p_input_price: Input price per million tokens (USD)
            p_output_price: Output price per million tokens (USD)
            p_provider: Provider label

        Returns:
            The upserted row, or None if the statement returned nothing
        """
        insert = postgresql.insert if self.dialect_name == "postgresql" else sqlite.insert
        stmt = insert(ModelPrice).values(
            [
                {
                    "model_name": p_model_name,
                    "input_price": p_input_price,
                    "output_price": p_output_price,
                    "provider": p_provider,
                }
            ]
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ModelPrice.model_name],
            set_={
                "input_price": stmt.excluded.input_price,
                "output_price": stmt.excluded.output_price,
                "provider": stmt.excluded.provider,
                "updated_at": func.now(),
            },
        ).returning(ModelPrice)

        result = await self.session.scalars(
            stmt,
            execution_options={"populate_existing": True},
        )
        return result.first()
