"""Create catalog, tasting, badge and comment tables

Revision ID: 3f9c1a7e5b20
Revises:
Create Date: 2025-10-02

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from cask.adapters.db.sa_types import BIGINT_PK, PORTABLE_JSON, StringList, UTCDateTime

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f9c1a7e5b20"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _id() -> sa.Column:
    return sa.Column(
        "id", BIGINT_PK, sa.Identity(always=False, start=1), nullable=False
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        UTCDateTime(),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "user",
        _id(),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        sa.Column(
            "notify_comments",
            sa.Boolean(),
            server_default=sa.text("true"),
            nullable=False,
            comment="Whether the user receives email for comments on tastings they follow.",
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_user")),
        sa.UniqueConstraint("username", name=op.f("uq_user_username")),
        sa.UniqueConstraint("email", name=op.f("uq_user_email")),
    )

    op.create_table(
        "entity",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "type",
            StringList(),
            nullable=False,
            comment="Roles the entity plays: brand, distiller and/or bottler.",
        ),
        sa.Column("country", sa.String(length=255), nullable=True),
        sa.Column("region", sa.String(length=255), nullable=True),
        sa.Column("total_tastings", sa.Integer(), server_default="0", nullable=False),
        sa.Column("total_bottles", sa.Integer(), server_default="0", nullable=False),
        _created_at(),
        sa.CheckConstraint(
            "total_tastings >= 0", name=op.f("ck_entity_total_tastings_positive")
        ),
        sa.CheckConstraint(
            "total_bottles >= 0", name=op.f("ck_entity_total_bottles_positive")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_entity")),
        sa.UniqueConstraint("name", name=op.f("uq_entity_name")),
    )

    op.create_table(
        "bottle",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=True),
        sa.Column("stated_age", sa.Integer(), nullable=True),
        sa.Column("brand_id", BIGINT_PK, nullable=False),
        sa.Column("bottler_id", BIGINT_PK, nullable=True),
        sa.Column("total_tastings", sa.Integer(), server_default="0", nullable=False),
        _created_at(),
        sa.CheckConstraint(
            "total_tastings >= 0", name=op.f("ck_bottle_total_tastings_positive")
        ),
        sa.ForeignKeyConstraint(
            ["brand_id"], ["entity.id"], name=op.f("fk_bottle_brand_id_entity")
        ),
        sa.ForeignKeyConstraint(
            ["bottler_id"], ["entity.id"], name=op.f("fk_bottle_bottler_id_entity")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_bottle")),
        sa.UniqueConstraint("name", name=op.f("uq_bottle_name")),
    )
    op.create_index(op.f("ix_bottle_brand_id"), "bottle", ["brand_id"])

    op.create_table(
        "bottle_distiller",
        sa.Column("bottle_id", BIGINT_PK, nullable=False),
        sa.Column("distiller_id", BIGINT_PK, nullable=False),
        sa.ForeignKeyConstraint(
            ["bottle_id"],
            ["bottle.id"],
            name=op.f("fk_bottle_distiller_bottle_id_bottle"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["distiller_id"],
            ["entity.id"],
            name=op.f("fk_bottle_distiller_distiller_id_entity"),
        ),
        sa.PrimaryKeyConstraint(
            "bottle_id", "distiller_id", name=op.f("pk_bottle_distiller")
        ),
    )

    op.create_table(
        "tasting",
        _id(),
        sa.Column("bottle_id", BIGINT_PK, nullable=False),
        sa.Column("created_by_id", BIGINT_PK, nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("tags", StringList(), nullable=False),
        sa.Column("comments", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "created_at",
            UTCDateTime(),
            nullable=False,
            comment="Tasting time truncated to whole seconds; part of the uniqueness key.",
        ),
        sa.CheckConstraint("comments >= 0", name=op.f("ck_tasting_comments_positive")),
        sa.ForeignKeyConstraint(
            ["bottle_id"], ["bottle.id"], name=op.f("fk_tasting_bottle_id_bottle")
        ),
        sa.ForeignKeyConstraint(
            ["created_by_id"], ["user.id"], name=op.f("fk_tasting_created_by_id_user")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_tasting")),
        sa.UniqueConstraint(
            "bottle_id",
            "created_by_id",
            "created_at",
            name=op.f("uq_tasting_bottle_id_created_by_id_created_at"),
        ),
    )
    op.create_index(op.f("ix_tasting_created_by_id"), "tasting", ["created_by_id"])

    op.create_table(
        "bottle_tag",
        _id(),
        sa.Column("bottle_id", BIGINT_PK, nullable=False),
        sa.Column("tag", sa.String(length=64), nullable=False),
        sa.Column("count", sa.Integer(), server_default="0", nullable=False),
        sa.ForeignKeyConstraint(
            ["bottle_id"],
            ["bottle.id"],
            name=op.f("fk_bottle_tag_bottle_id_bottle"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_bottle_tag")),
        sa.UniqueConstraint("bottle_id", "tag", name=op.f("uq_bottle_tag_bottle_id_tag")),
    )

    op.create_table(
        "badge",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("max_level", sa.Integer(), server_default="25", nullable=False),
        sa.Column(
            "checks",
            PORTABLE_JSON,
            nullable=False,
            comment='Ordered list of {"type": ..., "config": {...}} check payloads.',
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_badge")),
        sa.UniqueConstraint("name", name=op.f("uq_badge_name")),
    )

    op.create_table(
        "badge_award",
        _id(),
        sa.Column("badge_id", BIGINT_PK, nullable=False),
        sa.Column("user_id", BIGINT_PK, nullable=False),
        sa.Column("xp", sa.Integer(), server_default="0", nullable=False),
        sa.Column("level", sa.Integer(), server_default="0", nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["badge_id"],
            ["badge.id"],
            name=op.f("fk_badge_award_badge_id_badge"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"], ["user.id"], name=op.f("fk_badge_award_user_id_user")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_badge_award")),
        sa.UniqueConstraint(
            "badge_id", "user_id", name=op.f("uq_badge_award_badge_id_user_id")
        ),
    )

    op.create_table(
        "comment",
        _id(),
        sa.Column("tasting_id", BIGINT_PK, nullable=False),
        sa.Column("created_by_id", BIGINT_PK, nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["tasting_id"],
            ["tasting.id"],
            name=op.f("fk_comment_tasting_id_tasting"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["created_by_id"], ["user.id"], name=op.f("fk_comment_created_by_id_user")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_comment")),
    )
    op.create_index(op.f("ix_comment_tasting_id"), "comment", ["tasting_id"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index(op.f("ix_comment_tasting_id"), table_name="comment")
    op.drop_table("comment")
    op.drop_table("badge_award")
    op.drop_table("badge")
    op.drop_table("bottle_tag")
    op.drop_index(op.f("ix_tasting_created_by_id"), table_name="tasting")
    op.drop_table("tasting")
    op.drop_table("bottle_distiller")
    op.drop_index(op.f("ix_bottle_brand_id"), table_name="bottle")
    op.drop_table("bottle")
    op.drop_table("entity")
    op.drop_table("user")
