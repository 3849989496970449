"""Unit of Work interface for CASK.

Defines the AbstractUnitOfWork contract: a context-managed transaction that
exposes every store, plus an outbox of domain events that are released only
once the transaction commits.
"""

from __future__ import annotations

import abc
from collections.abc import Iterator

from cask.domain.events import DomainEvent

from .badges import BadgeStore
from .catalog import CatalogStore
from .prices import PriceStore
from .tastings import BottleTagStore, CommentStore, TastingStore
from .users import UserStore


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work."""

    catalog: CatalogStore
    users: UserStore
    tastings: TastingStore
    tags: BottleTagStore
    badges: BadgeStore
    comments: CommentStore
    prices: PriceStore

    def __init__(self) -> None:
        self._pending_events: list[DomainEvent] = []
        self._committed_events: list[DomainEvent] = []

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here.
        """
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back on exit. Anything already committed
        is unaffected.
        """
        self.rollback()

    def record(self, event: DomainEvent) -> None:
        """Record an event to be released if the current transaction commits."""
        self._pending_events.append(event)

    def commit(self) -> None:
        """Persist changes and release the events recorded so far."""
        self._commit()
        self._committed_events.extend(self._pending_events)
        self._pending_events.clear()

    def rollback(self) -> None:
        """Revert uncommitted changes and drop their events."""
        self._pending_events.clear()
        self._rollback()

    def collect_new_events(self) -> Iterator[DomainEvent]:
        """Yield (and forget) the events of committed transactions."""
        while self._committed_events:
            yield self._committed_events.pop(0)

    @abc.abstractmethod
    def _commit(self) -> None:
        """Finalize the underlying transaction."""

    @abc.abstractmethod
    def _rollback(self) -> None:
        """Revert the underlying transaction and clean up resources."""
