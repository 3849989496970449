"""add store pricing tables

Revision ID: 8d2e4b6a1c93
Revises: 3f9c1a7e5b20
Create Date: 2025-10-09

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from cask.adapters.db.sa_types import BIGINT_PK, UTCDateTime

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "8d2e4b6a1c93"
down_revision: str | Sequence[str] | None = "3f9c1a7e5b20"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "store",
        sa.Column("id", BIGINT_PK, sa.Identity(always=False, start=1), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("country", sa.String(length=255), nullable=True),
        sa.Column("last_run_at", UTCDateTime(), nullable=True),
        sa.Column(
            "created_at",
            UTCDateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_store")),
        sa.UniqueConstraint("type", name=op.f("uq_store_type")),
    )

    op.create_table(
        "store_price",
        sa.Column("id", BIGINT_PK, sa.Identity(always=False, start=1), nullable=False),
        sa.Column("store_id", BIGINT_PK, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("bottle_id", BIGINT_PK, nullable=True),
        sa.Column("price", sa.Integer(), nullable=False, comment="Price in cents."),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            UTCDateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["store_id"], ["store.id"], name=op.f("fk_store_price_store_id_store")
        ),
        sa.ForeignKeyConstraint(
            ["bottle_id"], ["bottle.id"], name=op.f("fk_store_price_bottle_id_bottle")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_store_price")),
        sa.UniqueConstraint("store_id", "name", name=op.f("uq_store_price_store_id_name")),
    )

    op.create_table(
        "store_price_history",
        sa.Column("id", BIGINT_PK, sa.Identity(always=False, start=1), nullable=False),
        sa.Column("price_id", BIGINT_PK, nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(
            ["price_id"],
            ["store_price.id"],
            name=op.f("fk_store_price_history_price_id_store_price"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_store_price_history")),
        sa.UniqueConstraint(
            "price_id", "date", name=op.f("uq_store_price_history_price_id_date")
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("store_price_history")
    op.drop_table("store_price")
    op.drop_table("store")
