"""Store pricing interface.

Scraper jobs push prices per store. Each (store, product name) pair has one
current price row which is updated in place, and one history row per day.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import date, datetime

from cask.domain.model import Store, StorePriceInput


@dataclass(frozen=True, slots=True)
class StorePrice:
    """Current price of a product at a store."""

    id: int
    store_id: int
    name: str
    price: int
    url: str
    bottle_id: int | None
    updated_at: datetime


class PriceStore(abc.ABC):
    """Stores, their current prices and price history."""

    @abc.abstractmethod
    def add_store(self, store_type: str, name: str, country: str | None = None) -> int:
        """Insert a store and return its id.

        Raises:
            DuplicateRecordError: If a store of the same type exists.
        """

    @abc.abstractmethod
    def get_store(self, store_type: str) -> Store | None:
        """Return the store of the given type, or ``None``."""

    @abc.abstractmethod
    def upsert_price(
        self, store_id: int, price: StorePriceInput, seen_at: datetime
    ) -> int:
        """Create or refresh the current price for (store, name); return its id."""

    @abc.abstractmethod
    def record_history(self, price_id: int, price: int, day: date) -> None:
        """Create or overwrite the history row for (price, day)."""

    @abc.abstractmethod
    def mark_run(self, store_id: int, at: datetime) -> None:
        """Record when prices were last submitted for a store."""

    @abc.abstractmethod
    def list_prices(self, store_id: int) -> list[StorePrice]:
        """Return the current prices of a store, ordered by name."""

    @abc.abstractmethod
    def history(self, price_id: int) -> dict[date, int]:
        """Return the price history of one price row."""
