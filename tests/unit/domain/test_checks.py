"""Unit tests for badge checks: parsing, dumping and evaluation."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from cask.domain.checks import (
    AgeCheck,
    BottleCheck,
    CategoryCheck,
    EntityCheck,
    EveryTastingCheck,
    RegionCheck,
    dump_check,
    evaluate,
    parse_check,
)
from cask.domain.errors import InvalidCheckConfigError, UnknownCheckTypeError
from cask.domain.model import (
    Bottle,
    BottleDetails,
    Entity,
    EntityType,
    Tasting,
    TastingSnapshot,
)

# pylint: disable=redefined-outer-name

GLEN = Entity(
    id=1,
    name="Glen Example",
    type=(EntityType.BRAND, EntityType.DISTILLER),
    country="Scotland",
    region="Speyside",
)
LOWLAND = Entity(
    id=2, name="Lowland Still", type=(EntityType.DISTILLER,), country="Scotland"
)
BOTTLER = Entity(
    id=3,
    name="Islay Bottlers",
    type=(EntityType.BOTTLER,),
    country="Scotland",
    region="Islay",
)


def snapshot_of(bottle: Bottle, distillers=(GLEN,), bottler=None) -> TastingSnapshot:
    """Wrap ``bottle`` in a snapshot of a fresh tasting."""
    tasting = Tasting(
        id=1,
        bottle_id=bottle.id,
        created_by_id=1,
        created_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
    )
    details = BottleDetails(
        bottle=bottle, brand=GLEN, distillers=tuple(distillers), bottler=bottler
    )
    return TastingSnapshot(tasting=tasting, details=details)


@pytest.fixture
def malt_12() -> TastingSnapshot:
    """A 12 year single malt branded and distilled by Glen Example."""
    return snapshot_of(
        Bottle(
            id=10,
            name="Glen Example 12",
            brand_id=1,
            category="single_malt",
            stated_age=12,
            distiller_ids=(1,),
        )
    )


@pytest.fixture
def blend() -> TastingSnapshot:
    """An unaged blend distilled at Lowland Still, bottled by Islay Bottlers."""
    return snapshot_of(
        Bottle(
            id=20,
            name="Blended Reserve",
            brand_id=1,
            category="blend",
            distiller_ids=(2,),
            bottler_id=3,
        ),
        distillers=(LOWLAND,),
        bottler=BOTTLER,
    )


# --- parsing ------------------------------------------------------------------


def test_parse_every_check_type():
    """Each registered type parses from its wire payload."""
    assert parse_check({"type": "age", "config": {"minAge": 10}}) == AgeCheck(min_age=10)
    assert parse_check({"type": "entity", "config": {"entities": [1, 1, 2]}}) == (
        EntityCheck(entity_ids=(1, 2))
    )
    assert parse_check({"type": "bottle", "config": {"bottle": 5}}) == BottleCheck(
        bottle_ids=(5,)
    )
    assert parse_check(
        {"type": "region", "config": {"country": " Scotland ", "region": "Islay"}}
    ) == RegionCheck(country="Scotland", region="Islay")
    assert parse_check({"type": "category", "config": {"category": "single_malt"}}) == (
        CategoryCheck(categories=("single_malt",))
    )
    assert parse_check({"type": "everyTasting"}) == EveryTastingCheck()


def test_parse_entity_check_with_role():
    """The optional ``type`` narrows an entity check to one role."""
    check = parse_check(
        {"type": "entity", "config": {"entities": [3], "type": "bottler"}}
    )
    assert check == EntityCheck(entity_ids=(3,), role=EntityType.BOTTLER)


def test_unknown_check_type():
    """An unregistered discriminator is rejected."""
    with pytest.raises(UnknownCheckTypeError, match="'nope'"):
        parse_check({"type": "nope", "config": {}})


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "age", "config": {"minAge": -1}},
        {"type": "age", "config": {"minAge": "12"}},
        {"type": "age", "config": {"minAge": 18, "maxAge": 12}},
        {"type": "entity", "config": {"entities": []}},
        {"type": "entity", "config": {"entities": ["1"]}},
        {"type": "entity", "config": {"entities": [1], "type": "importer"}},
        {"type": "bottle", "config": {}},
        {"type": "region", "config": {"region": "Islay"}},
        {"type": "category", "config": {"category": [""]}},
        {"type": "age", "config": "not-an-object"},
    ],
)
def test_invalid_check_configs(payload):
    """Malformed configurations raise `InvalidCheckConfigError`."""
    with pytest.raises(InvalidCheckConfigError):
        parse_check(payload)


@pytest.mark.parametrize(
    "check",
    [
        AgeCheck(min_age=3, max_age=None),
        EntityCheck(entity_ids=(1, 2), role=EntityType.DISTILLER),
        BottleCheck(bottle_ids=(7,)),
        RegionCheck(country="Japan"),
        CategoryCheck(categories=("bourbon", "rye")),
        EveryTastingCheck(),
    ],
)
def test_dump_then_parse_is_identity(check):
    """`dump_check` output parses back to an equal check."""
    assert parse_check(dump_check(check)) == check


# --- evaluation ---------------------------------------------------------------


def test_age_check(malt_12, blend):
    """Age bounds are inclusive; a bottle with no stated age never matches."""
    assert evaluate(AgeCheck(min_age=12), malt_12)
    assert evaluate(AgeCheck(max_age=12), malt_12)
    assert not evaluate(AgeCheck(min_age=13), malt_12)
    assert not evaluate(AgeCheck(min_age=0), blend)


def test_entity_check_any_role(malt_12, blend):
    """Without a role, brand, distillers and bottler all count."""
    assert evaluate(EntityCheck(entity_ids=(1,)), malt_12)
    assert evaluate(EntityCheck(entity_ids=(3,)), blend)
    assert not evaluate(EntityCheck(entity_ids=(3,)), malt_12)


def test_entity_check_by_role(blend):
    """With a role, only entities playing it for the bottle count."""
    assert evaluate(EntityCheck(entity_ids=(2,), role=EntityType.DISTILLER), blend)
    assert not evaluate(EntityCheck(entity_ids=(1,), role=EntityType.DISTILLER), blend)
    assert evaluate(EntityCheck(entity_ids=(3,), role=EntityType.BOTTLER), blend)
    assert evaluate(EntityCheck(entity_ids=(1,), role=EntityType.BRAND), blend)


def test_bottle_check(malt_12):
    """Matches only the listed bottles."""
    assert evaluate(BottleCheck(bottle_ids=(10, 11)), malt_12)
    assert not evaluate(BottleCheck(bottle_ids=(11,)), malt_12)


def test_region_check(malt_12, blend):
    """Country and region compare case-insensitively across all entities."""
    assert evaluate(RegionCheck(country="scotland"), malt_12)
    assert evaluate(RegionCheck(country="Scotland", region="speyside"), malt_12)
    assert not evaluate(RegionCheck(country="Scotland", region="Islay"), malt_12)
    assert evaluate(RegionCheck(country="Scotland", region="Islay"), blend)
    assert not evaluate(RegionCheck(country="Japan"), blend)


def test_category_check(malt_12, blend):
    """Category must be one of the configured values."""
    check = CategoryCheck(categories=("single_malt",))
    assert evaluate(check, malt_12)
    assert not evaluate(check, blend)


def test_every_tasting_check(malt_12, blend):
    """Always passes."""
    assert evaluate(EveryTastingCheck(), malt_12)
    assert evaluate(EveryTastingCheck(), blend)
