"""Badge definition store and award ledger interface."""

from __future__ import annotations

import abc

from cask.domain.badges import Badge
from cask.domain.checks import Check
from cask.domain.model import BadgeAward


class BadgeStore(abc.ABC):
    """Badge definitions (read-mostly) and the per-user award ledger."""

    @abc.abstractmethod
    def add(self, name: str, checks: tuple[Check, ...], max_level: int) -> int:
        """Insert a badge definition and return its id.

        Raises:
            DuplicateRecordError: If a badge with the same name exists.
        """

    @abc.abstractmethod
    def list(self) -> list[Badge]:
        """Return every badge, ordered by id."""

    @abc.abstractmethod
    def award(self, badge_id: int, user_id: int) -> None:
        """Add one xp to the (badge, user) ledger row, creating it if absent.

        The level is recomputed from the new xp in the same statement.
        """

    @abc.abstractmethod
    def get_award(self, badge_id: int, user_id: int) -> BadgeAward | None:
        """Return the ledger row for (badge, user), or ``None``."""
