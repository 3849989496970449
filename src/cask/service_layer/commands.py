"""Module defining Commands."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from cask.domain.badges import DEFAULT_MAX_LEVEL
from cask.domain.model import EntityType

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


@dataclass(frozen=True)
class AddTasting(Command):
    """Command to record a user's tasting of a bottle.

    ``created_at`` is client-supplied and optional; the server clock is used
    when it is omitted.
    """

    bottle_id: int
    user_id: int
    notes: str | None = None
    rating: float | None = None
    tags: tuple[str, ...] = ()
    created_at: datetime | None = None


@dataclass(frozen=True)
class CreateEntity(Command):
    """Command to register a brand, distiller and/or bottler."""

    name: str
    types: tuple[EntityType, ...] = ()
    country: str | None = None
    region: str | None = None


@dataclass(frozen=True)
class CreateBottle(Command):
    """Command to add a bottle to the catalog."""

    name: str
    brand_id: int
    category: str | None = None
    stated_age: int | None = None
    distiller_ids: tuple[int, ...] = ()
    bottler_id: int | None = None


@dataclass(frozen=True)
class CreateUser(Command):
    """Command to register a user."""

    username: str
    email: str
    display_name: str | None = None
    notify_comments: bool = True


@dataclass(frozen=True)
class CreateBadge(Command):
    """Command to define a badge from raw ``{"type", "config"}`` check payloads."""

    name: str
    checks: tuple[Mapping[str, Any], ...]
    max_level: int = DEFAULT_MAX_LEVEL


@dataclass(frozen=True)
class AddComment(Command):
    """Command to comment on a tasting."""

    tasting_id: int
    user_id: int
    comment: str


@dataclass(frozen=True)
class CreateStore(Command):
    """Command to register a store whose prices are scraped."""

    type: str
    name: str
    country: str | None = None


@dataclass(frozen=True)
class SubmittedPrice:
    """One scraped price line.

    ``bottle`` optionally links the price to a catalog bottle, either by id
    or by exact (case-insensitive) name.
    """

    name: str
    price: int
    url: str
    bottle: int | str | None = None


@dataclass(frozen=True)
class SubmitStorePrices(Command):
    """Command to push a batch of scraped prices for one store."""

    store_type: str
    prices: tuple[SubmittedPrice, ...] = field(default_factory=tuple)
