"""Model price definition."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DECIMAL, INTEGER, VARCHAR, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ModelPrice(Base):
    """Per-token pricing for one AI model.

    Attributes:
        id: Surrogate key; ascending id is insertion order
        model_name: Unique model name (natural key, case-sensitive)
        input_price: Cost per one million input tokens (USD)
        output_price: Cost per one million output tokens (USD)
        provider: Provider label
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "ai_model_prices"

    id: Mapped[int] = mapped_column(INTEGER, primary_key=True, autoincrement=True)
    model_name: Mapped[str] = mapped_column(VARCHAR(200), unique=True, index=True)
    input_price: Mapped[Decimal] = mapped_column(DECIMAL(12, 6))
    output_price: Mapped[Decimal] = mapped_column(DECIMAL(12, 6))
    provider: Mapped[str] = mapped_column(VARCHAR(100))
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<ModelPrice(id={self.id}, model_name='{self.model_name}', provider='{self.provider}')>"
