"""Badge checks.

A check is a typed predicate over a `TastingSnapshot`. The set of check kinds
is closed: each kind is a frozen dataclass carrying its own configuration, and
`evaluate` dispatches over them with an exhaustive ``match``. Checks travel
through storage and the API as ``{"type": ..., "config": {...}}`` payloads;
`parse_check` and `dump_check` convert between the two forms.

Adding a kind means adding a dataclass, a ``CHECK_TYPES`` entry and a ``case``
arm in `evaluate`. Nothing outside this module needs to change.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, TypeAlias, assert_never

from .errors import InvalidCheckConfigError, UnknownCheckTypeError
from .model import Entity, EntityType, TastingSnapshot

# pylint: disable=too-few-public-methods


def _optional_int(check_type: str, config: Mapping[str, Any], key: str) -> int | None:
    value = config.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidCheckConfigError(check_type, f"'{key}' must be a non-negative integer")
    return value


def _int_list(check_type: str, config: Mapping[str, Any], key: str) -> tuple[int, ...]:
    value = config.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        value = [value]
    if not isinstance(value, list) or not value:
        raise InvalidCheckConfigError(check_type, f"'{key}' must be a non-empty list of ids")
    if any(isinstance(v, bool) or not isinstance(v, int) for v in value):
        raise InvalidCheckConfigError(check_type, f"'{key}' must contain only integer ids")
    return tuple(dict.fromkeys(value))


def _str_list(check_type: str, config: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value = config.get(key)
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not value:
        raise InvalidCheckConfigError(check_type, f"'{key}' must be a non-empty list")
    if any(not isinstance(v, str) or not v.strip() for v in value):
        raise InvalidCheckConfigError(check_type, f"'{key}' must contain non-empty strings")
    return tuple(dict.fromkeys(v.strip() for v in value))


# ============================================================================
#                               Check kinds
# ============================================================================


@dataclass(frozen=True, slots=True)
class AgeCheck:
    """Bottle stated age within an inclusive range; either bound may be open."""

    TYPE: ClassVar[str] = "age"

    min_age: int | None = None
    max_age: int | None = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> AgeCheck:
        """Build from a ``{"minAge": .., "maxAge": ..}`` payload."""
        min_age = _optional_int(cls.TYPE, config, "minAge")
        max_age = _optional_int(cls.TYPE, config, "maxAge")
        if min_age is not None and max_age is not None and min_age > max_age:
            raise InvalidCheckConfigError(cls.TYPE, "'minAge' exceeds 'maxAge'")
        return cls(min_age=min_age, max_age=max_age)

    def config(self) -> dict[str, Any]:
        """Serializable configuration payload."""
        return {"minAge": self.min_age, "maxAge": self.max_age}


@dataclass(frozen=True, slots=True)
class EntityCheck:
    """Brand, distiller or bottler is one of the configured entities.

    When ``role`` is set only entities playing that role for the bottle count.
    """

    TYPE: ClassVar[str] = "entity"

    entity_ids: tuple[int, ...]
    role: EntityType | None = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> EntityCheck:
        """Build from a ``{"entities": [..], "type": ..}`` payload."""
        entity_ids = _int_list(cls.TYPE, config, "entities")
        role = config.get("type")
        if role is None:
            return cls(entity_ids=entity_ids)
        try:
            return cls(entity_ids=entity_ids, role=EntityType(role))
        except ValueError as e:
            raise InvalidCheckConfigError(cls.TYPE, f"unknown entity type {role!r}") from e

    def config(self) -> dict[str, Any]:
        """Serializable configuration payload."""
        return {
            "entities": list(self.entity_ids),
            "type": self.role.value if self.role else None,
        }


@dataclass(frozen=True, slots=True)
class BottleCheck:
    """Tasted bottle is one of the configured bottles."""

    TYPE: ClassVar[str] = "bottle"

    bottle_ids: tuple[int, ...]

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> BottleCheck:
        """Build from a ``{"bottle": [..]}`` payload."""
        return cls(bottle_ids=_int_list(cls.TYPE, config, "bottle"))

    def config(self) -> dict[str, Any]:
        """Serializable configuration payload."""
        return {"bottle": list(self.bottle_ids)}


@dataclass(frozen=True, slots=True)
class RegionCheck:
    """Some entity behind the bottle is located in the configured country/region."""

    TYPE: ClassVar[str] = "region"

    country: str
    region: str | None = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> RegionCheck:
        """Build from a ``{"country": .., "region": ..}`` payload."""
        country = config.get("country")
        if not isinstance(country, str) or not country.strip():
            raise InvalidCheckConfigError(cls.TYPE, "'country' is required")
        region = config.get("region")
        if region is not None and (not isinstance(region, str) or not region.strip()):
            raise InvalidCheckConfigError(cls.TYPE, "'region' must be a non-empty string")
        return cls(country=country.strip(), region=region.strip() if region else None)

    def config(self) -> dict[str, Any]:
        """Serializable configuration payload."""
        return {"country": self.country, "region": self.region}


@dataclass(frozen=True, slots=True)
class CategoryCheck:
    """Bottle category is one of the configured categories."""

    TYPE: ClassVar[str] = "category"

    categories: tuple[str, ...]

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> CategoryCheck:
        """Build from a ``{"category": [..]}`` payload."""
        return cls(categories=_str_list(cls.TYPE, config, "category"))

    def config(self) -> dict[str, Any]:
        """Serializable configuration payload."""
        return {"category": list(self.categories)}


@dataclass(frozen=True, slots=True)
class EveryTastingCheck:
    """Always passes."""

    TYPE: ClassVar[str] = "everyTasting"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> EveryTastingCheck:  # pylint: disable=unused-argument
        """Build from any payload; the configuration is ignored."""
        return cls()

    def config(self) -> dict[str, Any]:
        """Serializable configuration payload."""
        return {}


Check: TypeAlias = (
    AgeCheck | EntityCheck | BottleCheck | RegionCheck | CategoryCheck | EveryTastingCheck
)

# Registry of check kinds keyed by their wire discriminator
CHECK_TYPES: dict[str, type[Check]] = {
    AgeCheck.TYPE: AgeCheck,
    EntityCheck.TYPE: EntityCheck,
    BottleCheck.TYPE: BottleCheck,
    RegionCheck.TYPE: RegionCheck,
    CategoryCheck.TYPE: CategoryCheck,
    EveryTastingCheck.TYPE: EveryTastingCheck,
}


# ============================================================================
#                           Parsing / dumping
# ============================================================================


def parse_check(payload: Mapping[str, Any]) -> Check:
    """Build a check from its ``{"type": .., "config": {..}}`` payload.

    Raises:
        UnknownCheckTypeError: If ``type`` names no registered check kind.
        InvalidCheckConfigError: If ``config`` is malformed for that kind.
    """
    check_type = payload.get("type")
    if (check_cls := CHECK_TYPES.get(str(check_type))) is None:
        raise UnknownCheckTypeError(str(check_type))
    config = payload.get("config") or {}
    if not isinstance(config, Mapping):
        raise InvalidCheckConfigError(str(check_type), "config must be an object")
    return check_cls.from_config(config)


def dump_check(check: Check) -> dict[str, Any]:
    """Inverse of `parse_check`."""
    return {"type": check.TYPE, "config": check.config()}


# ============================================================================
#                               Evaluation
# ============================================================================


def _entities_in_role(snapshot: TastingSnapshot, role: EntityType | None) -> list[Entity]:
    details = snapshot.details
    match role:
        case None:
            return details.entities
        case EntityType.BRAND:
            return [details.brand]
        case EntityType.DISTILLER:
            return list(details.distillers)
        case EntityType.BOTTLER:
            return [details.bottler] if details.bottler else []
        case _:
            assert_never(role)


def _same(a: str | None, b: str) -> bool:
    return a is not None and a.strip().lower() == b.lower()


def evaluate(check: Check, snapshot: TastingSnapshot) -> bool:
    """Return True if ``check`` passes for ``snapshot``."""
    bottle = snapshot.bottle
    match check:
        case AgeCheck(min_age=min_age, max_age=max_age):
            if bottle.stated_age is None:
                return False
            if min_age is not None and bottle.stated_age < min_age:
                return False
            return max_age is None or bottle.stated_age <= max_age
        case EntityCheck(entity_ids=entity_ids, role=role):
            return any(e.id in entity_ids for e in _entities_in_role(snapshot, role))
        case BottleCheck(bottle_ids=bottle_ids):
            return bottle.id in bottle_ids
        case RegionCheck(country=country, region=region):
            return any(
                _same(e.country, country) and (region is None or _same(e.region, region))
                for e in snapshot.details.entities
            )
        case CategoryCheck(categories=categories):
            return bottle.category is not None and bottle.category in categories
        case EveryTastingCheck():
            return True
        case _:
            assert_never(check)
