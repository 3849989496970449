"""Relational schema for CASK (SQLAlchemy Core).

Constraints that carry behavior:

| Constraint                                   | Purpose                                  |
|----------------------------------------------|------------------------------------------|
| UNIQUE(tasting.bottle_id, created_by_id, created_at) | one tasting per user/bottle/second |
| UNIQUE(bottle_tag.bottle_id, tag)            | upsert target for tag counters           |
| UNIQUE(badge_award.badge_id, user_id)        | upsert target for the award ledger       |
| UNIQUE(store_price.store_id, name)           | upsert target for scraped prices         |
| UNIQUE(store_price_history.price_id, date)   | one history point per price per day      |
| CHECK(total_tastings >= 0) and friends       | counters never go negative               |

The Alembic migrations under ``adapters/db/alembic`` create the same objects;
`metadata.create_all()` is only used by in-memory test fixtures.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    Float,
    ForeignKey,
    Identity,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)

from cask.domain.model import MAX_TAG_LENGTH

from .metadata import metadata
from .sa_types import BIGINT_PK, PORTABLE_JSON, StringList, UTCDateTime

__all__ = [
    "badge",
    "badge_award",
    "bottle",
    "bottle_distiller",
    "bottle_tag",
    "comment",
    "entity",
    "store",
    "store_price",
    "store_price_history",
    "tasting",
    "user",
]


def _id() -> Column:
    return Column("id", BIGINT_PK, Identity(start=1), primary_key=True)


def _created_at() -> Column:
    return Column(
        "created_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )


user = Table(
    "user",
    metadata,
    _id(),
    Column("username", String(64), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("display_name", String(255), nullable=True),
    Column(
        "notify_comments",
        Boolean,
        nullable=False,
        server_default=text("true"),
        comment="Whether the user receives email for comments on tastings they follow.",
    ),
    _created_at(),
)

entity = Table(
    "entity",
    metadata,
    _id(),
    Column("name", String(255), nullable=False, unique=True),
    Column(
        "type",
        StringList(),
        nullable=False,
        comment="Roles the entity plays: brand, distiller and/or bottler.",
    ),
    Column("country", String(255), nullable=True),
    Column("region", String(255), nullable=True),
    Column("total_tastings", Integer, nullable=False, server_default="0"),
    Column("total_bottles", Integer, nullable=False, server_default="0"),
    _created_at(),
    CheckConstraint("total_tastings >= 0", name="total_tastings_positive"),
    CheckConstraint("total_bottles >= 0", name="total_bottles_positive"),
)

bottle = Table(
    "bottle",
    metadata,
    _id(),
    Column("name", String(255), nullable=False, unique=True),
    Column("category", String(64), nullable=True),
    Column("stated_age", Integer, nullable=True),
    Column("brand_id", BIGINT_PK, ForeignKey("entity.id"), nullable=False),
    Column("bottler_id", BIGINT_PK, ForeignKey("entity.id"), nullable=True),
    Column("total_tastings", Integer, nullable=False, server_default="0"),
    _created_at(),
    CheckConstraint("total_tastings >= 0", name="total_tastings_positive"),
    Index(None, "brand_id"),
)

bottle_distiller = Table(
    "bottle_distiller",
    metadata,
    Column(
        "bottle_id",
        BIGINT_PK,
        ForeignKey("bottle.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("distiller_id", BIGINT_PK, ForeignKey("entity.id"), primary_key=True),
)

tasting = Table(
    "tasting",
    metadata,
    _id(),
    Column("bottle_id", BIGINT_PK, ForeignKey("bottle.id"), nullable=False),
    Column("created_by_id", BIGINT_PK, ForeignKey("user.id"), nullable=False),
    Column("notes", Text, nullable=True),
    Column("rating", Float, nullable=True),
    Column("tags", StringList(), nullable=False),
    Column("comments", Integer, nullable=False, server_default="0"),
    Column(
        "created_at",
        UTCDateTime(),
        nullable=False,
        comment="Tasting time truncated to whole seconds; part of the uniqueness key.",
    ),
    UniqueConstraint("bottle_id", "created_by_id", "created_at"),
    CheckConstraint("comments >= 0", name="comments_positive"),
    Index(None, "created_by_id"),
)

bottle_tag = Table(
    "bottle_tag",
    metadata,
    _id(),
    Column(
        "bottle_id",
        BIGINT_PK,
        ForeignKey("bottle.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("tag", String(MAX_TAG_LENGTH), nullable=False),
    Column("count", Integer, nullable=False, server_default="0"),
    UniqueConstraint("bottle_id", "tag"),
)

badge = Table(
    "badge",
    metadata,
    _id(),
    Column("name", String(255), nullable=False, unique=True),
    Column("max_level", Integer, nullable=False, server_default="25"),
    Column(
        "checks",
        PORTABLE_JSON,
        nullable=False,
        comment='Ordered list of {"type": ..., "config": {...}} check payloads.',
    ),
    _created_at(),
)

badge_award = Table(
    "badge_award",
    metadata,
    _id(),
    Column(
        "badge_id",
        BIGINT_PK,
        ForeignKey("badge.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", BIGINT_PK, ForeignKey("user.id"), nullable=False),
    Column("xp", Integer, nullable=False, server_default="0"),
    Column("level", Integer, nullable=False, server_default="0"),
    _created_at(),
    UniqueConstraint("badge_id", "user_id"),
)

comment = Table(
    "comment",
    metadata,
    _id(),
    Column(
        "tasting_id",
        BIGINT_PK,
        ForeignKey("tasting.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("created_by_id", BIGINT_PK, ForeignKey("user.id"), nullable=False),
    Column("comment", Text, nullable=False),
    _created_at(),
    Index(None, "tasting_id"),
)

store = Table(
    "store",
    metadata,
    _id(),
    Column("type", String(64), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("country", String(255), nullable=True),
    Column("last_run_at", UTCDateTime(), nullable=True),
    _created_at(),
)

store_price = Table(
    "store_price",
    metadata,
    _id(),
    Column("store_id", BIGINT_PK, ForeignKey("store.id"), nullable=False),
    Column("name", String(255), nullable=False),
    Column("bottle_id", BIGINT_PK, ForeignKey("bottle.id"), nullable=True),
    Column("price", Integer, nullable=False, comment="Price in cents."),
    Column("url", Text, nullable=False),
    _created_at(),
    Column("updated_at", UTCDateTime(), nullable=False),
    UniqueConstraint("store_id", "name"),
)

store_price_history = Table(
    "store_price_history",
    metadata,
    _id(),
    Column(
        "price_id",
        BIGINT_PK,
        ForeignKey("store_price.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("price", Integer, nullable=False),
    Column("date", Date, nullable=False),
    UniqueConstraint("price_id", "date"),
)
