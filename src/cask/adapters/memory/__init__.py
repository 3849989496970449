"""In-memory implementations of the CASK store ports.

Used by unit tests and by anything that wants the service layer without a
database. All stores share one `InMemoryData` so cross-store references
(bottle -> entity, tasting -> bottle) resolve the way foreign keys do.
"""

from .badges import InMemoryBadgeStore
from .catalog import InMemoryCatalogStore
from .data import InMemoryData
from .prices import InMemoryPriceStore
from .tastings import InMemoryBottleTagStore, InMemoryCommentStore, InMemoryTastingStore
from .unit_of_work import InMemoryUnitOfWork
from .users import InMemoryUserStore

__all__ = [
    "InMemoryBadgeStore",
    "InMemoryBottleTagStore",
    "InMemoryCatalogStore",
    "InMemoryCommentStore",
    "InMemoryData",
    "InMemoryPriceStore",
    "InMemoryTastingStore",
    "InMemoryUnitOfWork",
    "InMemoryUserStore",
]
