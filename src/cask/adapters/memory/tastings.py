"""In-memory tasting, tag and comment stores for testing purposes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from cask.domain.model import Comment, NewTasting, Tasting
from cask.interfaces.errors import DuplicateTastingError, MissingReferenceError
from cask.interfaces.tastings import BottleTagStore, CommentStore, TastingStore

from .data import InMemoryData


class InMemoryTastingStore(TastingStore):
    """In-memory implementation of the TastingStore interface."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def add(self, tasting: NewTasting) -> Tasting:
        if tasting.bottle_id not in self._data.bottles:
            raise MissingReferenceError("bottle", f"Unknown bottle {tasting.bottle_id}")
        if tasting.created_by_id not in self._data.users:
            raise MissingReferenceError("user", f"Unknown user {tasting.created_by_id}")

        key = (tasting.bottle_id, tasting.created_by_id, tasting.created_at)
        for existing in self._data.tastings.values():
            if (existing.bottle_id, existing.created_by_id, existing.created_at) == key:
                raise DuplicateTastingError(tasting.bottle_id, tasting.created_by_id)

        tasting_id = self._data.next_id("tasting")
        created = Tasting(
            id=tasting_id,
            bottle_id=tasting.bottle_id,
            created_by_id=tasting.created_by_id,
            created_at=tasting.created_at,
            notes=tasting.notes,
            rating=tasting.rating,
            tags=tuple(sorted(tasting.tags)),
        )
        self._data.tastings[tasting_id] = created
        return created

    def get(self, tasting_id: int) -> Tasting | None:
        return self._data.tastings.get(tasting_id)

    def increment_comments(self, tasting_id: int) -> None:
        if (tasting := self._data.tastings.get(tasting_id)) is not None:
            self._data.tastings[tasting_id] = replace(
                tasting, comments=tasting.comments + 1
            )


class InMemoryBottleTagStore(BottleTagStore):
    """In-memory implementation of the BottleTagStore interface."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def increment(self, bottle_id: int, tags: Iterable[str]) -> None:
        for tag in set(tags):
            key = (bottle_id, tag)
            self._data.bottle_tags[key] = self._data.bottle_tags.get(key, 0) + 1

    def counts(self, bottle_id: int) -> dict[str, int]:
        return {
            tag: count
            for (b_id, tag), count in sorted(self._data.bottle_tags.items())
            if b_id == bottle_id
        }


class InMemoryCommentStore(CommentStore):
    """In-memory implementation of the CommentStore interface."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def add(
        self, tasting_id: int, created_by_id: int, comment: str, created_at: datetime
    ) -> Comment:
        if tasting_id not in self._data.tastings:
            raise MissingReferenceError("tasting", f"Unknown tasting {tasting_id}")
        if created_by_id not in self._data.users:
            raise MissingReferenceError("user", f"Unknown user {created_by_id}")
        comment_id = self._data.next_id("comment")
        created = Comment(
            id=comment_id,
            tasting_id=tasting_id,
            created_by_id=created_by_id,
            comment=comment,
            created_at=created_at,
        )
        self._data.comments[comment_id] = created
        return created

    def get(self, comment_id: int) -> Comment | None:
        return self._data.comments.get(comment_id)

    def commenter_ids(self, tasting_id: int) -> set[int]:
        return {
            c.created_by_id
            for c in self._data.comments.values()
            if c.tasting_id == tasting_id
        }
