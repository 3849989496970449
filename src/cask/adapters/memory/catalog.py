"""In-memory CatalogStore implementation for testing purposes."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from cask.domain.model import Bottle, BottleDetails, Entity, EntityType
from cask.interfaces.catalog import CatalogStore
from cask.interfaces.errors import DuplicateRecordError, MissingReferenceError

from .data import InMemoryData


class InMemoryCatalogStore(CatalogStore):
    """In-memory implementation of the CatalogStore interface."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    # --- entities ---

    def add_entity(
        self,
        name: str,
        types: Sequence[EntityType],
        country: str | None = None,
        region: str | None = None,
    ) -> int:
        if any(e.name == name for e in self._data.entities.values()):
            raise DuplicateRecordError("entity", name)
        entity_id = self._data.next_id("entity")
        self._data.entities[entity_id] = Entity(
            id=entity_id,
            name=name,
            type=tuple(sorted({EntityType(t) for t in types}, key=lambda t: t.value)),
            country=country,
            region=region,
        )
        return entity_id

    def get_entity(self, entity_id: int) -> Entity | None:
        return self._data.entities.get(entity_id)

    def get_entities(self, entity_ids: Sequence[int]) -> list[Entity]:
        return [
            self._data.entities[i]
            for i in sorted(set(entity_ids))
            if i in self._data.entities
        ]

    def increment_entity_tastings(self, entity_ids: Sequence[int]) -> None:
        for entity in self.get_entities(entity_ids):
            self._data.entities[entity.id] = replace(
                entity, total_tastings=entity.total_tastings + 1
            )

    def increment_entity_bottles(self, entity_ids: Sequence[int]) -> None:
        for entity in self.get_entities(entity_ids):
            self._data.entities[entity.id] = replace(
                entity, total_bottles=entity.total_bottles + 1
            )

    # --- bottles ---

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
        if any(b.name == name for b in self._data.bottles.values()):
            raise DuplicateRecordError("bottle", name)

        referenced = [brand_id, *distiller_ids]
        if bottler_id is not None:
            referenced.append(bottler_id)
        if missing := [i for i in referenced if i not in self._data.entities]:
            raise MissingReferenceError("entity", f"Unknown entity ids: {missing}")

        bottle_id = self._data.next_id("bottle")
        self._data.bottles[bottle_id] = Bottle(
            id=bottle_id,
            name=name,
            brand_id=brand_id,
            category=category,
            stated_age=stated_age,
            bottler_id=bottler_id,
            distiller_ids=tuple(sorted(set(distiller_ids))),
        )
        return bottle_id

    def get_bottle(self, bottle_id: int) -> Bottle | None:
        return self._data.bottles.get(bottle_id)

    def get_bottle_details(self, bottle_id: int) -> BottleDetails | None:
        if (bottle := self._data.bottles.get(bottle_id)) is None:
            return None
        entities = self._data.entities
        return BottleDetails(
            bottle=bottle,
            brand=entities[bottle.brand_id],
            distillers=tuple(entities[d] for d in bottle.distiller_ids),
            bottler=entities.get(bottle.bottler_id) if bottle.bottler_id else None,
        )

    def find_bottle_id(self, name: str) -> int | None:
        wanted = name.strip().lower()
        for bottle_id in sorted(self._data.bottles):
            if self._data.bottles[bottle_id].name.lower() == wanted:
                return bottle_id
        return None

    def increment_bottle_tastings(self, bottle_id: int) -> None:
        if (bottle := self._data.bottles.get(bottle_id)) is not None:
            self._data.bottles[bottle_id] = replace(
                bottle, total_tastings=bottle.total_tastings + 1
            )
