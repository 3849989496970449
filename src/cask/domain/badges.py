"""Badge definitions and the rule engine that decides eligibility."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .checks import Check, evaluate, parse_check
from .errors import InvalidBadgeError
from .model import TastingSnapshot

DEFAULT_MAX_LEVEL = 25
MAX_MAX_LEVEL = 100


@dataclass(frozen=True, slots=True)
class Badge:
    """A badge and the checks a tasting must pass to earn experience toward it."""

    id: int
    name: str
    checks: tuple[Check, ...]
    max_level: int = DEFAULT_MAX_LEVEL

    def qualifies(self, snapshot: TastingSnapshot) -> bool:
        """True iff every check passes. A badge without checks never qualifies."""
        return bool(self.checks) and all(evaluate(c, snapshot) for c in self.checks)


def qualifying_badges(
    badges: Iterable[Badge], snapshot: TastingSnapshot
) -> list[Badge]:
    """Return the badges, in input order, for which ``snapshot`` passes every check."""
    return [badge for badge in badges if badge.qualifies(snapshot)]


def build_checks(payloads: Sequence[Mapping[str, Any]]) -> tuple[Check, ...]:
    """Parse and validate the check payloads of a new badge definition.

    Raises:
        InvalidBadgeError: If no checks are given.
        UnknownCheckTypeError, InvalidCheckConfigError: From `parse_check`.
    """
    if not payloads:
        raise InvalidBadgeError("At least one check is required.")
    return tuple(parse_check(p) for p in payloads)


def validate_badge_name(name: str) -> str:
    """Return the trimmed name, rejecting blanks."""
    if not (trimmed := name.strip()):
        raise InvalidBadgeError("Badge name is required.")
    return trimmed


def validate_max_level(max_level: int) -> int:
    """Return ``max_level`` if it is within 1..100."""
    if not 1 <= max_level <= MAX_MAX_LEVEL:
        raise InvalidBadgeError(f"maxLevel must be between 1 and {MAX_MAX_LEVEL}.")
    return max_level
