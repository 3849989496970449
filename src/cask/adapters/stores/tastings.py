"""SQLAlchemy implementations of the tasting, tag and comment stores."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError

from cask.adapters.db.dialects import upsert_insert
from cask.adapters.db.schema import bottle_tag
from cask.adapters.db.schema import comment as comment_table
from cask.adapters.db.schema import tasting as tasting_table
from cask.domain.model import Comment, NewTasting, Tasting
from cask.interfaces.errors import DuplicateTastingError, MissingReferenceError
from cask.interfaces.tastings import BottleTagStore, CommentStore, TastingStore

from ._errors import integrity_message, is_foreign_key_violation, is_unique_violation

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, RowMapping

TASTING_UNIQUE_COLUMNS = ("bottle_id", "created_by_id", "created_at")


def _tasting_from_row(row: RowMapping) -> Tasting:
    return Tasting(
        id=row["id"],
        bottle_id=row["bottle_id"],
        created_by_id=row["created_by_id"],
        created_at=row["created_at"],
        notes=row["notes"],
        rating=row["rating"],
        tags=tuple(row["tags"]),
        comments=row["comments"],
    )


def _comment_from_row(row: RowMapping) -> Comment:
    return Comment(
        id=row["id"],
        tasting_id=row["tasting_id"],
        created_by_id=row["created_by_id"],
        comment=row["comment"],
        created_at=row["created_at"],
    )


class SqlAlchemyTastingStore(TastingStore):
    """Tasting store backed by the ``tasting`` table.

    The (bottle, user, created_at) uniqueness rule is left to the database's
    unique constraint; a violation surfaces as `DuplicateTastingError`.
    """

    def __init__(self, connection: Connection):
        self.connection = connection

    def add(self, tasting: NewTasting) -> Tasting:
        tags = tuple(sorted(tasting.tags))
        stmt = insert(tasting_table).values(
            bottle_id=tasting.bottle_id,
            created_by_id=tasting.created_by_id,
            created_at=tasting.created_at,
            notes=tasting.notes,
            rating=tasting.rating,
            tags=tags,
        )
        try:
            result = self.connection.execute(stmt)
        except IntegrityError as e:
            if is_unique_violation(e, "tasting", TASTING_UNIQUE_COLUMNS):
                raise DuplicateTastingError(
                    tasting.bottle_id, tasting.created_by_id
                ) from e
            if is_foreign_key_violation(e):
                raise MissingReferenceError("tasting", integrity_message(e)) from e
            raise

        return Tasting(
            id=int(result.inserted_primary_key[0]),
            bottle_id=tasting.bottle_id,
            created_by_id=tasting.created_by_id,
            created_at=tasting.created_at,
            notes=tasting.notes,
            rating=tasting.rating,
            tags=tags,
        )

    def get(self, tasting_id: int) -> Tasting | None:
        row = (
            self.connection.execute(
                select(tasting_table).where(tasting_table.c.id == tasting_id)
            )
            .mappings()
            .one_or_none()
        )
        return _tasting_from_row(row) if row else None

    def increment_comments(self, tasting_id: int) -> None:
        self.connection.execute(
            update(tasting_table)
            .where(tasting_table.c.id == tasting_id)
            .values(comments=tasting_table.c.comments + 1)
        )


class SqlAlchemyBottleTagStore(BottleTagStore):
    """Tag counters backed by ``bottle_tag``, maintained with ON CONFLICT upserts."""

    def __init__(self, connection: Connection):
        self.connection = connection

    def increment(self, bottle_id: int, tags: Iterable[str]) -> None:
        rows = [
            {"bottle_id": bottle_id, "tag": tag, "count": 1} for tag in sorted(set(tags))
        ]
        if not rows:
            return
        stmt = upsert_insert(self.connection, bottle_tag).values(rows)
        stmt = stmt.on_conflict_do_update(
            index_elements=[bottle_tag.c.bottle_id, bottle_tag.c.tag],
            set_={"count": bottle_tag.c.count + 1},
        )
        self.connection.execute(stmt)

    def counts(self, bottle_id: int) -> dict[str, int]:
        rows = self.connection.execute(
            select(bottle_tag.c.tag, bottle_tag.c.count)
            .where(bottle_tag.c.bottle_id == bottle_id)
            .order_by(bottle_tag.c.tag)
        )
        return {row.tag: row.count for row in rows}


class SqlAlchemyCommentStore(CommentStore):
    """Comment store backed by the ``comment`` table."""

    def __init__(self, connection: Connection):
        self.connection = connection

    def add(
        self, tasting_id: int, created_by_id: int, comment: str, created_at: datetime
    ) -> Comment:
        try:
            result = self.connection.execute(
                insert(comment_table).values(
                    tasting_id=tasting_id,
                    created_by_id=created_by_id,
                    comment=comment,
                    created_at=created_at,
                )
            )
        except IntegrityError as e:
            if is_foreign_key_violation(e):
                raise MissingReferenceError("comment", integrity_message(e)) from e
            raise
        return Comment(
            id=int(result.inserted_primary_key[0]),
            tasting_id=tasting_id,
            created_by_id=created_by_id,
            comment=comment,
            created_at=created_at,
        )

    def get(self, comment_id: int) -> Comment | None:
        row = (
            self.connection.execute(
                select(comment_table).where(comment_table.c.id == comment_id)
            )
            .mappings()
            .one_or_none()
        )
        return _comment_from_row(row) if row else None

    def commenter_ids(self, tasting_id: int) -> set[int]:
        rows = self.connection.execute(
            select(comment_table.c.created_by_id)
            .where(comment_table.c.tasting_id == tasting_id)
            .distinct()
        ).scalars()
        return set(rows)
