"""In-memory BadgeStore implementation for testing purposes."""

from __future__ import annotations

from cask.domain.badges import Badge
from cask.domain.checks import Check
from cask.domain.model import BadgeAward, level_for_xp
from cask.interfaces.badges import BadgeStore
from cask.interfaces.errors import DuplicateRecordError

from .data import InMemoryData


class InMemoryBadgeStore(BadgeStore):
    """In-memory implementation of the BadgeStore interface."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def add(self, name: str, checks: tuple[Check, ...], max_level: int) -> int:
        if any(b.name == name for b in self._data.badges.values()):
            raise DuplicateRecordError("badge", name)
        badge_id = self._data.next_id("badge")
        self._data.badges[badge_id] = Badge(
            id=badge_id, name=name, checks=tuple(checks), max_level=max_level
        )
        return badge_id

    def list(self) -> list[Badge]:
        return [self._data.badges[i] for i in sorted(self._data.badges)]

    def award(self, badge_id: int, user_id: int) -> None:
        current = self._data.awards.get((badge_id, user_id))
        xp = (current.xp if current else 0) + 1
        self._data.awards[(badge_id, user_id)] = BadgeAward(
            badge_id=badge_id, user_id=user_id, xp=xp, level=level_for_xp(xp)
        )

    def get_award(self, badge_id: int, user_id: int) -> BadgeAward | None:
        return self._data.awards.get((badge_id, user_id))
