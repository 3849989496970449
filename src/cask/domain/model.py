"""Domain records and rules for the tasting catalog.

The records here are plain frozen dataclasses. Storage adapters build them
from rows; handlers pass them between ports; the badge engine reads them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum

from .errors import (
    CreatedAtTooFarInFutureError,
    CreatedAtTooFarInPastError,
    InvalidRatingError,
    TagTooLongError,
)

# pylint: disable=too-many-instance-attributes

#: Experience points needed to advance one badge level.
XP_PER_LEVEL = 5

#: Client-supplied tasting timestamps may run this far ahead of the server clock.
MAX_FUTURE_SECONDS = 60 * 5

#: Client-supplied tasting timestamps may lag the server clock by this much.
MAX_PAST_SECONDS = 60 * 60 * 24 * 7

#: Longest tag, after trimming, that a tasting may carry.
MAX_TAG_LENGTH = 64

MIN_RATING = 0.0
MAX_RATING = 5.0


class EntityType(str, Enum):
    """Roles an entity can play for a bottle."""

    BRAND = "brand"
    DISTILLER = "distiller"
    BOTTLER = "bottler"


@dataclass(frozen=True, slots=True)
class User:
    """A registered user."""

    id: int
    username: str
    email: str
    display_name: str | None = None
    notify_comments: bool = True


@dataclass(frozen=True, slots=True)
class Entity:
    """A brand, distiller or bottler."""

    id: int
    name: str
    type: tuple[EntityType, ...] = ()
    country: str | None = None
    region: str | None = None
    total_tastings: int = 0
    total_bottles: int = 0


@dataclass(frozen=True, slots=True)
class Bottle:
    """A bottle as stored in the catalog, with references by id."""

    id: int
    name: str
    brand_id: int
    category: str | None = None
    stated_age: int | None = None
    bottler_id: int | None = None
    distiller_ids: tuple[int, ...] = ()
    total_tastings: int = 0

    @property
    def implicated_entity_ids(self) -> list[int]:
        """Brand plus all distillers, de-duplicated, in first-seen order."""
        return list(dict.fromkeys([self.brand_id, *self.distiller_ids]))


@dataclass(frozen=True, slots=True)
class BottleDetails:
    """A bottle together with the entity records it references."""

    bottle: Bottle
    brand: Entity
    distillers: tuple[Entity, ...] = ()
    bottler: Entity | None = None

    @property
    def entities(self) -> list[Entity]:
        """Every entity referenced by the bottle, de-duplicated by id."""
        found: dict[int, Entity] = {self.brand.id: self.brand}
        for entity in self.distillers:
            found.setdefault(entity.id, entity)
        if self.bottler is not None:
            found.setdefault(self.bottler.id, self.bottler)
        return list(found.values())


@dataclass(frozen=True, slots=True)
class NewTasting:
    """A validated tasting ready to be inserted."""

    bottle_id: int
    created_by_id: int
    created_at: datetime
    notes: str | None = None
    rating: float | None = None
    tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class Tasting:
    """A persisted tasting."""

    id: int
    bottle_id: int
    created_by_id: int
    created_at: datetime
    notes: str | None = None
    rating: float | None = None
    tags: tuple[str, ...] = ()
    comments: int = 0


@dataclass(frozen=True, slots=True)
class TastingSnapshot:
    """Denormalized view of a tasting used to evaluate badge checks."""

    tasting: Tasting
    details: BottleDetails

    @property
    def bottle(self) -> Bottle:
        """The tasted bottle."""
        return self.details.bottle


@dataclass(frozen=True, slots=True)
class Comment:
    """A comment left on a tasting."""

    id: int
    tasting_id: int
    created_by_id: int
    comment: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class Store:
    """A retailer whose prices are scraped."""

    id: int
    type: str
    name: str
    country: str | None = None
    last_run_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class StorePriceInput:
    """A single scraped price, in cents."""

    name: str
    price: int
    url: str
    bottle_id: int | None = None


@dataclass(frozen=True, slots=True)
class BadgeAward:
    """Accumulated experience for one user on one badge."""

    badge_id: int
    user_id: int
    xp: int
    level: int


# ============================================================================
#                               Rules
# ============================================================================


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_tags(tags: Iterable[str] | None) -> frozenset[str]:
    """Lowercase tags and collapse duplicates.

    Blank tags are dropped; surrounding whitespace is not significant.

    Raises:
        TagTooLongError: If a trimmed tag is longer than ``MAX_TAG_LENGTH``.
    """
    if not tags:
        return frozenset()
    normalized = frozenset(t.strip().lower() for t in tags if t and t.strip())
    for tag in normalized:
        if len(tag) > MAX_TAG_LENGTH:
            raise TagTooLongError(tag, MAX_TAG_LENGTH)
    return normalized


def tasting_time_bucket(value: datetime) -> datetime:
    """Truncate a tasting timestamp to the bucket used for uniqueness."""
    return as_utc(value).replace(microsecond=0)


def validate_created_at(created_at: datetime, now: datetime) -> datetime:
    """Check a client-supplied timestamp against the accepted window.

    Args:
        created_at: The client-supplied timestamp.
        now: The current server time.

    Returns:
        The timestamp normalized to UTC.

    Raises:
        CreatedAtTooFarInFutureError: more than 5 minutes ahead of ``now``.
        CreatedAtTooFarInPastError: more than 7 days behind ``now``.
    """
    created_at = as_utc(created_at)
    now = as_utc(now)
    if created_at > now + timedelta(seconds=MAX_FUTURE_SECONDS):
        raise CreatedAtTooFarInFutureError(MAX_FUTURE_SECONDS)
    if created_at < now - timedelta(seconds=MAX_PAST_SECONDS):
        raise CreatedAtTooFarInPastError(MAX_PAST_SECONDS)
    return created_at


def validate_rating(rating: float | None) -> float | None:
    """Return the rating unchanged if it is on the 0-5 scale."""
    if rating is None:
        return None
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRatingError(rating)
    return rating


def level_for_xp(xp: int) -> int:
    """Badge level derived from accumulated experience."""
    return xp // XP_PER_LEVEL + 1


def price_day(value: datetime) -> date:
    """The calendar day (UTC) a price observation is filed under."""
    return as_utc(value).date()
