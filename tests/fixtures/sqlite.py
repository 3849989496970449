"""sqlite-specific fixtures"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from alembic import command
from sqlalchemy.engine import URL

from cask import config
from cask.adapters.db.engine import make_engine
from cask.adapters.db.metadata import metadata

# Registers every table on `metadata`
from cask.adapters.db import schema  # noqa: F401 # pylint: disable=unused-import

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


@pytest.fixture
def sqlite_engine_memory() -> Iterator[Engine]:
    """In-memory SQLite engine for single-connection tests.

    Uses `make_engine()` so SQLite PRAGMAs (foreign keys in particular) are
    applied, and builds the schema with `metadata.create_all()`.

    The default pool hands every checkout the same in-memory database, so
    this engine must not be shared between threads.

    Yields:
        Engine: SQLAlchemy engine bound to an in-memory DB.
    """
    url = "sqlite+pysqlite:///:memory:"
    test_engine = make_engine(url)
    metadata.create_all(test_engine)
    yield test_engine
    metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def sqlite_engine_file(tmp_path: Path) -> Iterator[Engine]:
    """File-backed SQLite engine migrated via Alembic (per test).

    A temp *file* (not :memory:) lets Alembic's schema changes persist across
    connections and lets several threads open their own connections. This
    fixture:
      - builds a sqlite+pysqlite URL under the test's temp dir,
      - runs `alembic upgrade head` for that URL,
      - returns an Engine from `make_engine()` (so PRAGMAs apply),
      - disposes the engine at teardown.

    Yields:
        Engine: SQLAlchemy engine pointing at a temp file DB.
    """
    url = str(URL.create("sqlite+pysqlite", database=str(tmp_path / "test.db")))
    cfg = config.build_alembic_config(url)
    command.upgrade(cfg, "head")
    test_engine = make_engine(url)
    try:
        yield test_engine
    finally:
        test_engine.dispose()
