"""Catalog store interface.

The catalog holds bottles and the entities (brands, distillers, bottlers)
behind them. Besides reads, the only mutations the tasting flow performs are
relative counter increments, which implementations must express as atomic
``SET col = col + n`` updates rather than read-modify-write.
"""

from __future__ import annotations

import abc
from collections.abc import Sequence

from cask.domain.model import Bottle, BottleDetails, Entity, EntityType


class CatalogStore(abc.ABC):
    """Bottles and entities."""

    # --- entities ---

    @abc.abstractmethod
    def add_entity(
        self,
        name: str,
        types: Sequence[EntityType],
        country: str | None = None,
        region: str | None = None,
    ) -> int:
        """Insert an entity and return its id.

        Raises:
            DuplicateRecordError: If an entity with the same name exists.
        """

    @abc.abstractmethod
    def get_entity(self, entity_id: int) -> Entity | None:
        """Return the entity with the given id, or ``None``."""

    @abc.abstractmethod
    def get_entities(self, entity_ids: Sequence[int]) -> list[Entity]:
        """Return the entities with the given ids, ordered by id; unknown ids are skipped."""

    @abc.abstractmethod
    def increment_entity_tastings(self, entity_ids: Sequence[int]) -> None:
        """Add one to ``total_tastings`` of every listed entity in a single update."""

    @abc.abstractmethod
    def increment_entity_bottles(self, entity_ids: Sequence[int]) -> None:
        """Add one to ``total_bottles`` of every listed entity in a single update."""

    # --- bottles ---

    @abc.abstractmethod
    def add_bottle(  # pylint: disable=too-many-arguments
        self,
        name: str,
        brand_id: int,
        *,
        category: str | None = None,
        stated_age: int | None = None,
        distiller_ids: Sequence[int] = (),
        bottler_id: int | None = None,
    ) -> int:
        """Insert a bottle with its distiller links and return its id.

        Raises:
            DuplicateRecordError: If a bottle with the same name exists.
            MissingReferenceError: If a referenced entity does not exist.
        """

    @abc.abstractmethod
    def get_bottle(self, bottle_id: int) -> Bottle | None:
        """Return the bottle with the given id, or ``None``."""

    @abc.abstractmethod
    def get_bottle_details(self, bottle_id: int) -> BottleDetails | None:
        """Return the bottle together with its brand, distillers and bottler."""

    @abc.abstractmethod
    def find_bottle_id(self, name: str) -> int | None:
        """Return the id of the bottle whose name matches case-insensitively."""

    @abc.abstractmethod
    def increment_bottle_tastings(self, bottle_id: int) -> None:
        """Add one to the bottle's ``total_tastings``."""
