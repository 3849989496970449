"""Unit tests for the add_tasting handler.

Covers the whole write path against the in-memory unit of work: tasting
insert, bottle and entity counters, tag counters, badge experience, error
mapping, and the guarantee that a rejected submission leaves no trace.
"""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest

from cask.domain.model import MAX_TAG_LENGTH, XP_PER_LEVEL
from cask.service_layer.commands import AddTasting
from cask.service_layer.errors import ConflictError, InvalidInputError, NotFoundError

from tests.fixtures.datagen import NOW

from .base import HandlerTestBase


class TestAddTasting(HandlerTestBase):
    """Tests for the add_tasting handler."""

    def add(self, bottle_id: int | None = None, user_id: int | None = None, **kwargs):
        """Submit a tasting of the 12 year malt by alice unless told otherwise."""
        kwargs.setdefault("created_at", NOW)
        return self.bus.handle(
            AddTasting(
                bottle_id=bottle_id if bottle_id is not None else self.seed.malt_12,
                user_id=user_id if user_id is not None else self.seed.alice,
                **kwargs,
            )
        )

    def bottle_tastings(self, bottle_id: int) -> int:
        return self.uow.catalog.get_bottle(bottle_id).total_tastings

    def entity_tastings(self, entity_id: int) -> int:
        return self.uow.catalog.get_entity(entity_id).total_tastings

    # --- happy path -----------------------------------------------------------

    def test_records_tasting(self):
        """The persisted tasting is returned and the unit commits."""
        tasting = self.add(notes="Vanilla", rating=4.5, tags=("Honey",))

        assert tasting.id is not None
        assert tasting.bottle_id == self.seed.malt_12
        assert tasting.created_by_id == self.seed.alice
        assert tasting.notes == "Vanilla"
        assert tasting.rating == 4.5
        assert tasting.tags == ("honey",)
        assert tasting.created_at == NOW
        assert self.uow.tastings.get(tasting.id) == tasting
        self.assert_committed()

    def test_created_at_defaults_to_clock(self):
        """Without createdAt the server clock is used."""
        tasting = self.add(created_at=None)
        assert tasting.created_at == NOW

    def test_increments_bottle_and_entity_counters(self):
        """Bottle and every implicated entity gain one tasting."""
        self.add()
        assert self.bottle_tastings(self.seed.malt_12) == 1
        # brand and distiller are the same entity: counted once
        assert self.entity_tastings(self.seed.glen) == 1

    def test_bottler_is_not_an_implicated_entity(self):
        """For the blend, brand and distiller count but the bottler does not."""
        self.add(bottle_id=self.seed.blend)
        assert self.entity_tastings(self.seed.glen) == 1
        assert self.entity_tastings(self.seed.lowland) == 1
        assert self.entity_tastings(self.seed.islay_bottlers) == 0

    def test_tags_are_lowercased_and_deduplicated(self):
        """["Smoky", "smoky", "Peaty"] yields two tag rows with count 1."""
        tasting = self.add(tags=("Smoky", "smoky", "Peaty"))
        assert tasting.tags == ("peaty", "smoky")
        assert self.uow.tags.counts(self.seed.malt_12) == {"peaty": 1, "smoky": 1}

    def test_tag_counts_accumulate_across_users(self):
        """Each tasting adds one to each of its tags."""
        self.add(tags=("smoky",))
        self.add(user_id=self.seed.bob, tags=("Smoky", "sweet"))
        assert self.uow.tags.counts(self.seed.malt_12) == {"smoky": 2, "sweet": 1}

    def test_two_users_same_bottle_same_time(self):
        """Uniqueness is per user: both tastings land and the counter reads 2."""
        self.add()
        self.add(user_id=self.seed.bob)
        assert self.bottle_tastings(self.seed.malt_12) == 2

    def test_logs_committed_tasting(self, caplog):
        """The TastingCreated event is logged after commit."""
        with caplog.at_level(logging.INFO, logger="cask"):
            tasting = self.add()
        assert any(
            f"Tasting {tasting.id} recorded" in rec.getMessage() for rec in caplog.records
        )

    # --- badges ---------------------------------------------------------------

    def test_qualifying_badge_awards_xp(self):
        """A 12 year single malt earns experience on "Aged Malts"."""
        self.add()
        award = self.uow.badges.get_award(self.seed.aged_malts, self.seed.alice)
        assert award is not None
        assert (award.xp, award.level) == (1, 1)

    def test_non_qualifying_bottle_awards_nothing(self):
        """An 8 year single malt fails the age check."""
        self.add(bottle_id=self.seed.malt_8)
        assert self.uow.badges.get_award(self.seed.aged_malts, self.seed.alice) is None

    def test_level_up_after_xp_per_level_tastings(self):
        """Level 2 is reached exactly at XP_PER_LEVEL experience."""
        for i in range(XP_PER_LEVEL - 1):
            self.add(created_at=NOW - timedelta(minutes=i))
        award = self.uow.badges.get_award(self.seed.aged_malts, self.seed.alice)
        assert (award.xp, award.level) == (XP_PER_LEVEL - 1, 1)

        self.add(created_at=NOW - timedelta(hours=1))
        award = self.uow.badges.get_award(self.seed.aged_malts, self.seed.alice)
        assert (award.xp, award.level) == (XP_PER_LEVEL, 2)

    # --- createdAt window -----------------------------------------------------

    @pytest.mark.parametrize(
        "offset", [timedelta(minutes=2), -timedelta(days=6)], ids=["2m-future", "6d-past"]
    )
    def test_created_at_inside_window(self, offset):
        """Timestamps a little ahead or days behind are accepted as given."""
        tasting = self.add(created_at=NOW + offset)
        assert tasting.created_at == NOW + offset

    @pytest.mark.parametrize(
        ("offset", "message"),
        [
            (timedelta(minutes=6), "createdAt too far in future"),
            (-timedelta(days=8), "createdAt too far in past"),
        ],
        ids=["6m-future", "8d-past"],
    )
    def test_created_at_outside_window(self, offset, message):
        """Out-of-window timestamps are invalid input and write nothing."""
        with pytest.raises(InvalidInputError, match=message):
            self.add(created_at=NOW + offset)
        assert not self.uow.data.tastings
        self.assert_not_committed()

    def test_created_at_checked_before_bottle(self):
        """A bad timestamp is reported even when the bottle is unknown too."""
        with pytest.raises(InvalidInputError, match="createdAt too far in future") as exc:
            self.add(bottle_id=999, created_at=NOW + timedelta(hours=1))
        assert not isinstance(exc.value, NotFoundError)

    def test_rating_out_of_range(self):
        """Ratings above 5 are invalid input."""
        with pytest.raises(InvalidInputError, match="between 0 and 5"):
            self.add(rating=7)

    def test_overlong_tag_is_invalid_input(self):
        """Tags longer than the stored column are rejected before any write."""
        with pytest.raises(InvalidInputError, match=f"at most {MAX_TAG_LENGTH}"):
            self.add(tags=("smoky", "x" * (MAX_TAG_LENGTH + 1)))
        assert not self.uow.data.tastings
        assert self.uow.tags.counts(self.seed.malt_12) == {}
        self.assert_not_committed()

    # --- failures -------------------------------------------------------------

    def test_unknown_bottle(self):
        """An unknown bottle is a client error."""
        with pytest.raises(NotFoundError, match="Could not identify bottle"):
            self.add(bottle_id=999)
        self.assert_not_committed()

    def test_unknown_user(self):
        """An unknown user is a client error and nothing is written."""
        with pytest.raises(NotFoundError, match="Could not identify user"):
            self.add(user_id=999)
        assert self.bottle_tastings(self.seed.malt_12) == 0
        self.assert_not_committed()

    def test_duplicate_is_conflict_and_leaves_counters_alone(self):
        """A repeat submission conflicts; counters, tags and xp keep their values."""
        self.add(tags=("smoky",))
        self.reset_committed()

        with pytest.raises(ConflictError, match="Tasting already exists"):
            self.add(tags=("smoky", "new"))

        self.assert_not_committed()
        assert self.bottle_tastings(self.seed.malt_12) == 1
        assert self.entity_tastings(self.seed.glen) == 1
        assert self.uow.tags.counts(self.seed.malt_12) == {"smoky": 1}
        award = self.uow.badges.get_award(self.seed.aged_malts, self.seed.alice)
        assert award.xp == 1
        assert len(self.uow.data.tastings) == 1

    def test_duplicate_within_same_second(self):
        """Timestamps in the same second collide."""
        self.add(created_at=NOW.replace(microsecond=100_000))
        with pytest.raises(ConflictError):
            self.add(created_at=NOW.replace(microsecond=900_000))

    @pytest.mark.parametrize(
        "store, method",
        [
            ("tags", "increment"),
            ("badges", "award"),
            ("catalog", "increment_entity_tastings"),
        ],
    )
    def test_failure_after_insert_rolls_everything_back(
        self, monkeypatch, store, method
    ):
        """A store failing mid-transaction undoes the tasting and every counter."""

        def boom(*args, **kwargs):
            raise RuntimeError("storage failure")

        monkeypatch.setattr(getattr(self.uow, store), method, boom)

        with pytest.raises(RuntimeError, match="storage failure"):
            self.add(tags=("smoky",))

        self.assert_not_committed()
        assert not self.uow.data.tastings
        assert self.bottle_tastings(self.seed.malt_12) == 0
        assert self.entity_tastings(self.seed.glen) == 0
        assert self.uow.tags.counts(self.seed.malt_12) == {}
        assert self.uow.badges.get_award(self.seed.aged_malts, self.seed.alice) is None
