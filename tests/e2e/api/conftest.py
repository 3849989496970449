"""Fixtures for end-to-end API tests.

The app runs over a migrated, file-backed SQLite database (requests are
served from worker threads, so an in-memory database would not be shared)
seeded with the reference catalog, with email disabled and a fixed clock.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from cask.adapters.unit_of_work import SqlAlchemyUnitOfWork
from cask.entrypoints.api.app import create_app

from tests.fixtures.datagen import NOW, SeededCatalog, seed_catalog

# pylint: disable=redefined-outer-name


@pytest.fixture
def uow(sqlite_engine_file) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(sqlite_engine_file)


@pytest.fixture
def seed(uow) -> SeededCatalog:
    return seed_catalog(uow)


@pytest.fixture
def client(sqlite_engine_file, seed) -> Iterator[TestClient]:  # pylint: disable=unused-argument
    """A client for the app; the engine outlives it and is not disposed here."""
    app = create_app(engine=sqlite_engine_file, mailer=None, clock=lambda: NOW)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def as_user(seed):
    """Headers identifying a seeded user by name."""

    def _headers(name: str = "alice") -> dict[str, str]:
        return {"X-User-Id": str(getattr(seed, name))}

    return _headers
