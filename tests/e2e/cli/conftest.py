"""Fixtures for end-to-end CLI tests.

Provides a Click runner, a migrated SQLite database exposed through
``CASK_DB_URL``, and keeps the flight recorder's log file under the test's
temporary directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from alembic import command
from click.testing import CliRunner

from cask import config

# pylint: disable=redefined-outer-name


@pytest.fixture(autouse=True)
def log_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the flight recorder at a temp file for every CLI test."""
    path = tmp_path / "latest.log"
    monkeypatch.setenv("CASK_LOG_PATH", str(path))
    return path


@pytest.fixture
def runner() -> CliRunner:
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def db_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """A migrated SQLite database, exported as ``CASK_DB_URL``."""
    url = f"sqlite:///{tmp_path / 'cask.db'}"
    command.upgrade(config.build_alembic_config(url), "head")
    monkeypatch.setenv(config.DB_URL_ENV, url)
    return url


@pytest.fixture
def no_db_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(config.DB_URL_ENV, raising=False)
