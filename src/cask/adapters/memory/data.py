"""In-memory shared data store for the memory adapters."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date

from cask.domain.badges import Badge
from cask.domain.model import (
    BadgeAward,
    Bottle,
    Comment,
    Entity,
    Store,
    Tasting,
    User,
)
from cask.interfaces.prices import StorePrice


@dataclass(slots=True)
class InMemoryData:
    """Shared in-memory backing store for the in-memory adapters.

    A single instance should be passed to every memory store of a unit of
    work so they operate on a common data source. Records are immutable, so
    a shallow copy of each mapping is enough to snapshot the whole store.
    """

    users: dict[int, User] = field(default_factory=dict)
    entities: dict[int, Entity] = field(default_factory=dict)
    bottles: dict[int, Bottle] = field(default_factory=dict)
    tastings: dict[int, Tasting] = field(default_factory=dict)

    # keyed by (bottle_id, tag)
    bottle_tags: dict[tuple[int, str], int] = field(default_factory=dict)

    badges: dict[int, Badge] = field(default_factory=dict)

    # keyed by (badge_id, user_id)
    awards: dict[tuple[int, int], BadgeAward] = field(default_factory=dict)

    comments: dict[int, Comment] = field(default_factory=dict)
    stores: dict[int, Store] = field(default_factory=dict)
    prices: dict[int, StorePrice] = field(default_factory=dict)

    # keyed by (price_id, day)
    price_history: dict[tuple[int, date], int] = field(default_factory=dict)

    # last id handed out, per record kind
    sequences: dict[str, int] = field(default_factory=dict)

    def next_id(self, kind: str) -> int:
        """Return the next identity value for ``kind``, starting at 1."""
        self.sequences[kind] = self.sequences.get(kind, 0) + 1
        return self.sequences[kind]

    def snapshot(self) -> dict[str, dict]:
        """Return a copy of every mapping, for `restore`."""
        return {f.name: dict(getattr(self, f.name)) for f in fields(self)}

    def restore(self, snapshot: dict[str, dict]) -> None:
        """Reset every mapping to the state captured by `snapshot`."""
        for name, value in snapshot.items():
            setattr(self, name, dict(value))
