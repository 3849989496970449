"""Handlers for stores and the prices scraped from them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from cask.domain.model import StorePriceInput, price_day
from cask.interfaces.catalog import CatalogStore
from cask.interfaces.errors import DuplicateRecordError
from cask.interfaces.unit_of_work import AbstractUnitOfWork
from cask.service_layer import commands
from cask.service_layer.errors import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def create_store(cmd: commands.CreateStore, uow: AbstractUnitOfWork) -> int:
    """Register a store and return its id."""
    if not cmd.type.strip() or not cmd.name.strip():
        raise InvalidInputError("Store type and name are required")
    with uow:
        try:
            store_id = uow.prices.add_store(cmd.type, cmd.name, cmd.country)
        except DuplicateRecordError as e:
            raise ConflictError(f"Store '{cmd.type}' already exists") from e
        uow.commit()
    return store_id


def _resolve_bottle(catalog: CatalogStore, ref: int | str | None) -> int | None:
    if ref is None:
        return None
    if isinstance(ref, int):
        return ref if catalog.get_bottle(ref) is not None else None
    return catalog.find_bottle_id(ref)


def submit_store_prices(
    cmd: commands.SubmitStorePrices,
    uow: AbstractUnitOfWork,
    clock: Callable[[], datetime],
) -> int:
    """Upsert a batch of prices for one store and return how many were stored.

    Each price refreshes the current row for (store, name) and the history
    row for today. A bottle reference that cannot be resolved leaves the
    price unlinked.

    Raises:
        NotFoundError: If no store of ``store_type`` exists.
        InvalidInputError: If a price is negative or has no name.
    """
    for submitted in cmd.prices:
        if not submitted.name.strip():
            raise InvalidInputError("Price name is required")
        if submitted.price < 0:
            raise InvalidInputError(f"Invalid price for '{submitted.name}'")

    now = clock()
    day = price_day(now)

    with uow:
        store = uow.prices.get_store(cmd.store_type)
        if store is None:
            raise NotFoundError(f"Unknown store '{cmd.store_type}'")

        for submitted in cmd.prices:
            price_id = uow.prices.upsert_price(
                store.id,
                StorePriceInput(
                    name=submitted.name,
                    price=submitted.price,
                    url=submitted.url,
                    bottle_id=_resolve_bottle(uow.catalog, submitted.bottle),
                ),
                now,
            )
            uow.prices.record_history(price_id, submitted.price, day)

        uow.prices.mark_run(store.id, now)
        uow.commit()

    logger.info("Stored %d price(s) for store %s", len(cmd.prices), cmd.store_type)
    return len(cmd.prices)


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.CreateStore: create_store,
    commands.SubmitStorePrices: submit_store_prices,
}
