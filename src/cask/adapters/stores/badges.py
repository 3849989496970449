"""SQLAlchemy implementation of the badge store and award ledger."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError

from cask.adapters.db.dialects import upsert_insert
from cask.adapters.db.schema import badge, badge_award
from cask.domain.badges import Badge
from cask.domain.checks import Check, dump_check, parse_check
from cask.domain.model import XP_PER_LEVEL, BadgeAward, level_for_xp
from cask.interfaces.badges import BadgeStore
from cask.interfaces.errors import DuplicateRecordError

from ._errors import is_unique_violation

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection


class SqlAlchemyBadgeStore(BadgeStore):
    """Badge store backed by the ``badge`` and ``badge_award`` tables.

    Awards are a single ``INSERT ... ON CONFLICT (badge_id, user_id) DO UPDATE``
    that adds one xp and derives the level from the new xp, so concurrent
    awards to the same user never lose an increment.
    """

    def __init__(self, connection: Connection):
        self.connection = connection

    def add(self, name: str, checks: tuple[Check, ...], max_level: int) -> int:
        stmt = insert(badge).values(
            name=name,
            max_level=max_level,
            checks=[dump_check(c) for c in checks],
        )
        try:
            result = self.connection.execute(stmt)
        except IntegrityError as e:
            if is_unique_violation(e, "badge", ["name"]):
                raise DuplicateRecordError("badge", name) from e
            raise
        return int(result.inserted_primary_key[0])

    def list(self) -> list[Badge]:
        rows = self.connection.execute(select(badge).order_by(badge.c.id)).mappings()
        return [
            Badge(
                id=row["id"],
                name=row["name"],
                checks=tuple(parse_check(p) for p in row["checks"] or ()),
                max_level=row["max_level"],
            )
            for row in rows
        ]

    def award(self, badge_id: int, user_id: int) -> None:
        new_xp = badge_award.c.xp + 1
        stmt = upsert_insert(self.connection, badge_award).values(
            badge_id=badge_id, user_id=user_id, xp=1, level=level_for_xp(1)
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[badge_award.c.badge_id, badge_award.c.user_id],
            set_={"xp": new_xp, "level": new_xp // XP_PER_LEVEL + 1},
        )
        self.connection.execute(stmt)

    def get_award(self, badge_id: int, user_id: int) -> BadgeAward | None:
        row = self.connection.execute(
            select(badge_award.c.xp, badge_award.c.level).where(
                badge_award.c.badge_id == badge_id,
                badge_award.c.user_id == user_id,
            )
        ).one_or_none()
        if row is None:
            return None
        return BadgeAward(badge_id=badge_id, user_id=user_id, xp=row.xp, level=row.level)
