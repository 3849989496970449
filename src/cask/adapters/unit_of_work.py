"""SQLAlchemy-backed Unit of Work for CASK.

Provides a context-managed UnitOfWork using a single SQLAlchemy Connection
shared by every SQLAlchemy store, so one ``with uow:`` block is one
database transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cask.adapters.stores import (
    SqlAlchemyBadgeStore,
    SqlAlchemyBottleTagStore,
    SqlAlchemyCatalogStore,
    SqlAlchemyCommentStore,
    SqlAlchemyPriceStore,
    SqlAlchemyTastingStore,
    SqlAlchemyUserStore,
)
from cask.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work."""

    def __init__(self, engine: Engine):
        super().__init__()
        self.engine = engine
        self.connection: Connection

    def __enter__(self):
        self.connection = self.engine.connect()
        self.catalog = SqlAlchemyCatalogStore(self.connection)
        self.users = SqlAlchemyUserStore(self.connection)
        self.tastings = SqlAlchemyTastingStore(self.connection)
        self.tags = SqlAlchemyBottleTagStore(self.connection)
        self.badges = SqlAlchemyBadgeStore(self.connection)
        self.comments = SqlAlchemyCommentStore(self.connection)
        self.prices = SqlAlchemyPriceStore(self.connection)
        return super().__enter__()

    def __exit__(self, *args):
        super().__exit__(*args)
        self.connection.close()

    def _commit(self):
        self.connection.commit()

    def _rollback(self):
        self.connection.rollback()
