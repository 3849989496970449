"""Tasting, tag aggregation and comment store interfaces."""

from __future__ import annotations

import abc
from collections.abc import Iterable
from datetime import datetime

from cask.domain.model import Comment, NewTasting, Tasting


class TastingStore(abc.ABC):
    """Tastings."""

    @abc.abstractmethod
    def add(self, tasting: NewTasting) -> Tasting:
        """Insert a tasting and return the persisted row.

        Uniqueness on (bottle, user, created_at) is enforced by the store.

        Raises:
            DuplicateTastingError: If the uniqueness constraint rejects the row.
        """

    @abc.abstractmethod
    def get(self, tasting_id: int) -> Tasting | None:
        """Return the tasting with the given id, or ``None``."""

    @abc.abstractmethod
    def increment_comments(self, tasting_id: int) -> None:
        """Add one to the tasting's comment counter."""


class BottleTagStore(abc.ABC):
    """Per-bottle tag counters.

    Each (bottle, tag) pair is unique. Incrementing an absent pair creates it
    with a count of one; incrementing an existing pair adds one. There is no
    decrement.
    """

    @abc.abstractmethod
    def increment(self, bottle_id: int, tags: Iterable[str]) -> None:
        """Upsert every tag of a tasting against its bottle."""

    @abc.abstractmethod
    def counts(self, bottle_id: int) -> dict[str, int]:
        """Return the tag counters for a bottle."""


class CommentStore(abc.ABC):
    """Comments on tastings."""

    @abc.abstractmethod
    def add(
        self, tasting_id: int, created_by_id: int, comment: str, created_at: datetime
    ) -> Comment:
        """Insert a comment and return the persisted row."""

    @abc.abstractmethod
    def get(self, comment_id: int) -> Comment | None:
        """Return the comment with the given id, or ``None``."""

    @abc.abstractmethod
    def commenter_ids(self, tasting_id: int) -> set[int]:
        """Return the distinct ids of every user who commented on a tasting."""
