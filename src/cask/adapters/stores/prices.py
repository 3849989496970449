"""SQLAlchemy implementation of the store pricing port."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError

from cask.adapters.db.dialects import upsert_insert
from cask.adapters.db.schema import store, store_price, store_price_history
from cask.domain.model import Store, StorePriceInput
from cask.interfaces.errors import DuplicateRecordError
from cask.interfaces.prices import PriceStore, StorePrice

from ._errors import is_unique_violation

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection


class SqlAlchemyPriceStore(PriceStore):
    """Price store backed by ``store``, ``store_price`` and ``store_price_history``."""

    def __init__(self, connection: Connection):
        self.connection = connection

    def add_store(self, store_type: str, name: str, country: str | None = None) -> int:
        try:
            result = self.connection.execute(
                insert(store).values(type=store_type, name=name, country=country)
            )
        except IntegrityError as e:
            if is_unique_violation(e, "store", ["type"]):
                raise DuplicateRecordError("store", store_type) from e
            raise
        return int(result.inserted_primary_key[0])

    def get_store(self, store_type: str) -> Store | None:
        row = (
            self.connection.execute(select(store).where(store.c.type == store_type))
            .mappings()
            .one_or_none()
        )
        if row is None:
            return None
        return Store(
            id=row["id"],
            type=row["type"],
            name=row["name"],
            country=row["country"],
            last_run_at=row["last_run_at"],
        )

    def upsert_price(
        self, store_id: int, price: StorePriceInput, seen_at: datetime
    ) -> int:
        stmt = upsert_insert(self.connection, store_price).values(
            store_id=store_id,
            name=price.name,
            price=price.price,
            url=price.url,
            bottle_id=price.bottle_id,
            updated_at=seen_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[store_price.c.store_id, store_price.c.name],
            set_={
                "price": stmt.excluded.price,
                "url": stmt.excluded.url,
                "bottle_id": stmt.excluded.bottle_id,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(store_price.c.id)
        return int(self.connection.execute(stmt).scalar_one())

    def record_history(self, price_id: int, price: int, day: date) -> None:
        stmt = upsert_insert(self.connection, store_price_history).values(
            price_id=price_id, price=price, date=day
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[store_price_history.c.price_id, store_price_history.c.date],
            set_={"price": stmt.excluded.price},
        )
        self.connection.execute(stmt)

    def mark_run(self, store_id: int, at: datetime) -> None:
        self.connection.execute(
            update(store).where(store.c.id == store_id).values(last_run_at=at)
        )

    def list_prices(self, store_id: int) -> list[StorePrice]:
        rows = self.connection.execute(
            select(store_price)
            .where(store_price.c.store_id == store_id)
            .order_by(store_price.c.name)
        ).mappings()
        return [
            StorePrice(
                id=row["id"],
                store_id=row["store_id"],
                name=row["name"],
                price=row["price"],
                url=row["url"],
                bottle_id=row["bottle_id"],
                updated_at=row["updated_at"],
            )
            for row in rows
        ]

    def history(self, price_id: int) -> dict[date, int]:
        rows = self.connection.execute(
            select(store_price_history.c.date, store_price_history.c.price)
            .where(store_price_history.c.price_id == price_id)
            .order_by(store_price_history.c.date)
        )
        return {row.date: row.price for row in rows}
