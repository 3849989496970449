"""Pytest fixtures for store contract tests.

Provided fixtures
-----------------
- **uow**: Parametrized unit of work over every store implementation:
  `"memory"` (the in-memory stores) and `"sql"` (the SQLAlchemy stores on an
  in-memory SQLite database). Each test gets a fresh, empty backend.
- **seed**: The reference catalog written through `uow`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cask.adapters.memory import InMemoryUnitOfWork
from cask.adapters.unit_of_work import SqlAlchemyUnitOfWork

from tests.fixtures.datagen import SeededCatalog, seed_catalog

if TYPE_CHECKING:
    from cask.interfaces.unit_of_work import AbstractUnitOfWork

# pylint: disable=redefined-outer-name


@pytest.fixture(params=["memory", "sql"])
def uow(request: pytest.FixtureRequest) -> AbstractUnitOfWork:
    """Return a fresh unit of work for the requested backend."""
    match request.param:
        case "memory":
            return InMemoryUnitOfWork()
        case "sql":
            return SqlAlchemyUnitOfWork(request.getfixturevalue("sqlite_engine_memory"))
        case _:
            raise ValueError(f"unknown store type: {request.param}")


@pytest.fixture
def seed(uow: AbstractUnitOfWork) -> SeededCatalog:
    return seed_catalog(uow)
