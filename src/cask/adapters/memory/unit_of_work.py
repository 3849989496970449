"""In-memory Unit of Work for CASK.

Commits and rollbacks are emulated by snapshotting the shared
`InMemoryData` when the unit is entered and restoring it on rollback.
"""

from __future__ import annotations

from cask.interfaces.unit_of_work import AbstractUnitOfWork

from .badges import InMemoryBadgeStore
from .catalog import InMemoryCatalogStore
from .data import InMemoryData
from .prices import InMemoryPriceStore
from .tastings import InMemoryBottleTagStore, InMemoryCommentStore, InMemoryTastingStore
from .users import InMemoryUserStore


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Unit of work over `InMemoryData`.

    Attributes:
        data: The shared backing store.
        committed: True once `commit` has been called; tests reset it freely.
    """

    def __init__(self, data: InMemoryData | None = None) -> None:
        super().__init__()
        self.data = data if data is not None else InMemoryData()
        self.catalog = InMemoryCatalogStore(self.data)
        self.users = InMemoryUserStore(self.data)
        self.tastings = InMemoryTastingStore(self.data)
        self.tags = InMemoryBottleTagStore(self.data)
        self.badges = InMemoryBadgeStore(self.data)
        self.comments = InMemoryCommentStore(self.data)
        self.prices = InMemoryPriceStore(self.data)
        self.committed = False
        self._snapshot = self.data.snapshot()

    def __enter__(self) -> InMemoryUnitOfWork:
        self._snapshot = self.data.snapshot()
        return self

    def _commit(self) -> None:
        self.committed = True
        self._snapshot = self.data.snapshot()

    def _rollback(self) -> None:
        self.data.restore(self._snapshot)
