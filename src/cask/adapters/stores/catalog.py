"""SQLAlchemy implementation of the catalog store."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError

from cask.adapters.db.schema import bottle, bottle_distiller, entity
from cask.domain.model import Bottle, BottleDetails, Entity, EntityType
from cask.interfaces.catalog import CatalogStore
from cask.interfaces.errors import DuplicateRecordError, MissingReferenceError

from ._errors import integrity_message, is_foreign_key_violation, is_unique_violation

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, RowMapping


def _entity_from_row(row: RowMapping) -> Entity:
    return Entity(
        id=row["id"],
        name=row["name"],
        type=tuple(EntityType(t) for t in row["type"]),
        country=row["country"],
        region=row["region"],
        total_tastings=row["total_tastings"],
        total_bottles=row["total_bottles"],
    )


class SqlAlchemyCatalogStore(CatalogStore):
    """Catalog store backed by the ``entity``, ``bottle`` and ``bottle_distiller`` tables."""

    def __init__(self, connection: Connection):
        self.connection = connection

    # --- entities ---

    def add_entity(
        self,
        name: str,
        types: Sequence[EntityType],
        country: str | None = None,
        region: str | None = None,
    ) -> int:
        stmt = insert(entity).values(
            name=name,
            type=[EntityType(t).value for t in types],
            country=country,
            region=region,
        )
        try:
            result = self.connection.execute(stmt)
        except IntegrityError as e:
            if is_unique_violation(e, "entity", ["name"]):
                raise DuplicateRecordError("entity", name) from e
            raise
        return int(result.inserted_primary_key[0])

    def get_entity(self, entity_id: int) -> Entity | None:
        row = (
            self.connection.execute(select(entity).where(entity.c.id == entity_id))
            .mappings()
            .one_or_none()
        )
        return _entity_from_row(row) if row else None

    def get_entities(self, entity_ids: Sequence[int]) -> list[Entity]:
        if not entity_ids:
            return []
        rows = self.connection.execute(
            select(entity).where(entity.c.id.in_(entity_ids)).order_by(entity.c.id)
        ).mappings()
        return [_entity_from_row(row) for row in rows]

    def increment_entity_tastings(self, entity_ids: Sequence[int]) -> None:
        if not entity_ids:
            return
        self.connection.execute(
            update(entity)
            .where(entity.c.id.in_(entity_ids))
            .values(total_tastings=entity.c.total_tastings + 1)
        )

    def increment_entity_bottles(self, entity_ids: Sequence[int]) -> None:
        if not entity_ids:
            return
        self.connection.execute(
            update(entity)
            .where(entity.c.id.in_(entity_ids))
            .values(total_bottles=entity.c.total_bottles + 1)
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
        try:
            result = self.connection.execute(
                insert(bottle).values(
                    name=name,
                    brand_id=brand_id,
                    category=category,
                    stated_age=stated_age,
                    bottler_id=bottler_id,
                )
            )
            bottle_id = int(result.inserted_primary_key[0])
            if distiller_ids:
                self.connection.execute(
                    insert(bottle_distiller),
                    [
                        {"bottle_id": bottle_id, "distiller_id": d}
                        for d in dict.fromkeys(distiller_ids)
                    ],
                )
        except IntegrityError as e:
            if is_unique_violation(e, "bottle", ["name"]):
                raise DuplicateRecordError("bottle", name) from e
            if is_foreign_key_violation(e):
                raise MissingReferenceError("entity", integrity_message(e)) from e
            raise
        return bottle_id

    def get_bottle(self, bottle_id: int) -> Bottle | None:
        row = (
            self.connection.execute(select(bottle).where(bottle.c.id == bottle_id))
            .mappings()
            .one_or_none()
        )
        if row is None:
            return None
        distiller_ids = self.connection.execute(
            select(bottle_distiller.c.distiller_id)
            .where(bottle_distiller.c.bottle_id == bottle_id)
            .order_by(bottle_distiller.c.distiller_id)
        ).scalars()
        return Bottle(
            id=row["id"],
            name=row["name"],
            brand_id=row["brand_id"],
            category=row["category"],
            stated_age=row["stated_age"],
            bottler_id=row["bottler_id"],
            distiller_ids=tuple(distiller_ids),
            total_tastings=row["total_tastings"],
        )

    def get_bottle_details(self, bottle_id: int) -> BottleDetails | None:
        if (found := self.get_bottle(bottle_id)) is None:
            return None

        wanted = [found.brand_id, *found.distiller_ids]
        if found.bottler_id is not None:
            wanted.append(found.bottler_id)
        by_id = {e.id: e for e in self.get_entities(list(dict.fromkeys(wanted)))}

        return BottleDetails(
            bottle=found,
            brand=by_id[found.brand_id],
            distillers=tuple(by_id[d] for d in found.distiller_ids if d in by_id),
            bottler=by_id.get(found.bottler_id) if found.bottler_id else None,
        )

    def find_bottle_id(self, name: str) -> int | None:
        return self.connection.execute(
            select(bottle.c.id)
            .where(func.lower(bottle.c.name) == name.strip().lower())
            .order_by(bottle.c.id)
            .limit(1)
        ).scalar_one_or_none()

    def increment_bottle_tastings(self, bottle_id: int) -> None:
        self.connection.execute(
            update(bottle)
            .where(bottle.c.id == bottle_id)
            .values(total_tastings=bottle.c.total_tastings + 1)
        )
