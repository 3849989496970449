"""In-memory PriceStore implementation for testing purposes."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

from cask.domain.model import Store, StorePriceInput
from cask.interfaces.errors import DuplicateRecordError
from cask.interfaces.prices import PriceStore, StorePrice

from .data import InMemoryData


class InMemoryPriceStore(PriceStore):
    """In-memory implementation of the PriceStore interface."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def add_store(self, store_type: str, name: str, country: str | None = None) -> int:
        if self.get_store(store_type) is not None:
            raise DuplicateRecordError("store", store_type)
        store_id = self._data.next_id("store")
        self._data.stores[store_id] = Store(
            id=store_id, type=store_type, name=name, country=country
        )
        return store_id

    def get_store(self, store_type: str) -> Store | None:
        for store in self._data.stores.values():
            if store.type == store_type:
                return store
        return None

    def upsert_price(
        self, store_id: int, price: StorePriceInput, seen_at: datetime
    ) -> int:
        for existing in self._data.prices.values():
            if existing.store_id == store_id and existing.name == price.name:
                self._data.prices[existing.id] = replace(
                    existing,
                    price=price.price,
                    url=price.url,
                    bottle_id=price.bottle_id,
                    updated_at=seen_at,
                )
                return existing.id

        price_id = self._data.next_id("store_price")
        self._data.prices[price_id] = StorePrice(
            id=price_id,
            store_id=store_id,
            name=price.name,
            price=price.price,
            url=price.url,
            bottle_id=price.bottle_id,
            updated_at=seen_at,
        )
        return price_id

    def record_history(self, price_id: int, price: int, day: date) -> None:
        self._data.price_history[(price_id, day)] = price

    def mark_run(self, store_id: int, at: datetime) -> None:
        if (store := self._data.stores.get(store_id)) is not None:
            self._data.stores[store_id] = replace(store, last_run_at=at)

    def list_prices(self, store_id: int) -> list[StorePrice]:
        return sorted(
            (p for p in self._data.prices.values() if p.store_id == store_id),
            key=lambda p: p.name,
        )

    def history(self, price_id: int) -> dict[date, int]:
        return {
            day: price
            for (p_id, day), price in sorted(self._data.price_history.items())
            if p_id == price_id
        }
