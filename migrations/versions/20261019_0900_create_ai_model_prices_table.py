"""create_ai_model_prices_table

Revision ID: 20261019_0900
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_0900"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create ai_model_prices table."""
    op.create_table(
        "ai_model_prices",
        sa.Column("id", sa.INTEGER(), autoincrement=True, nullable=False),
        sa.Column("model_name", sa.VARCHAR(length=200), nullable=False),
        sa.Column("input_price", sa.DECIMAL(precision=12, scale=6), nullable=False),
        sa.Column("output_price", sa.DECIMAL(precision=12, scale=6), nullable=False),
        sa.Column("provider", sa.VARCHAR(length=100), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_ai_model_prices_model_name"), "ai_model_prices", ["model_name"], unique=True
    )


def downgrade() -> None:
    """Drop ai_model_prices table."""
    op.drop_index(op.f("ix_ai_model_prices_model_name"), table_name="ai_model_prices")
    op.drop_table("ai_model_prices")
