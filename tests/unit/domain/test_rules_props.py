"""Hypothesis property tests for the tasting rules.

- **Tag normalization** is idempotent, yields lowercase tags only, and does
  not depend on the case or multiplicity of its input.
- **Levels** never decrease as experience grows and advance exactly every
  `XP_PER_LEVEL` points.
- **createdAt window**: a timestamp is accepted iff it lies within
  [now - 7 days, now + 5 minutes].
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from cask.domain.errors import InvalidTastingError
from cask.domain.model import (
    MAX_FUTURE_SECONDS,
    MAX_PAST_SECONDS,
    XP_PER_LEVEL,
    level_for_xp,
    normalize_tags,
    validate_created_at,
)

pytestmark = [pytest.mark.property]

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

tag_text = st.text(alphabet="abcdefgXYZ -", max_size=12)


@given(st.lists(tag_text, max_size=20))
def test_normalize_tags_idempotent(tags):
    """Normalizing twice equals normalizing once."""
    once = normalize_tags(tags)
    assert normalize_tags(once) == once


@given(st.lists(tag_text, max_size=20))
def test_normalize_tags_lowercase_and_trimmed(tags):
    """Every resulting tag is lowercase, trimmed and non-empty."""
    for tag in normalize_tags(tags):
        assert tag == tag.lower() == tag.strip()
        assert tag


@given(st.lists(tag_text, max_size=20))
def test_normalize_tags_ignores_case_and_duplicates(tags):
    """Upper-casing or repeating the input changes nothing."""
    expected = normalize_tags(tags)
    assert normalize_tags([t.upper() for t in tags]) == expected
    assert normalize_tags(tags + tags) == expected


@given(st.integers(min_value=0, max_value=10_000))
def test_level_is_monotonic(xp):
    """One more point of experience never lowers the level."""
    assert level_for_xp(xp + 1) >= level_for_xp(xp)


@given(st.integers(min_value=0, max_value=10_000))
def test_level_advances_every_xp_per_level(xp):
    """Adding XP_PER_LEVEL points always gains exactly one level."""
    assert level_for_xp(xp + XP_PER_LEVEL) == level_for_xp(xp) + 1


@given(st.integers(min_value=-2 * MAX_PAST_SECONDS, max_value=2 * MAX_FUTURE_SECONDS))
def test_created_at_window(offset_seconds):
    """Accepted iff -7d <= offset <= +5m."""
    created_at = NOW + timedelta(seconds=offset_seconds)
    inside = -MAX_PAST_SECONDS <= offset_seconds <= MAX_FUTURE_SECONDS
    try:
        validate_created_at(created_at, NOW)
    except InvalidTastingError:
        assert not inside
    else:
        assert inside
