"""SQLAlchemy Core implementations of the CASK store ports.

Every store wraps a single `Connection` owned by the unit of work, so all
stores of one unit share one transaction.
"""

from .badges import SqlAlchemyBadgeStore
from .catalog import SqlAlchemyCatalogStore
from .prices import SqlAlchemyPriceStore
from .tastings import (
    SqlAlchemyBottleTagStore,
    SqlAlchemyCommentStore,
    SqlAlchemyTastingStore,
)
from .users import SqlAlchemyUserStore

__all__ = [
    "SqlAlchemyBadgeStore",
    "SqlAlchemyBottleTagStore",
    "SqlAlchemyCatalogStore",
    "SqlAlchemyCommentStore",
    "SqlAlchemyPriceStore",
    "SqlAlchemyTastingStore",
    "SqlAlchemyUserStore",
]
