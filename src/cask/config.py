"""Configuration for CASK.

All runtime settings come from the environment:

| Variable              | Meaning                                         | Default |
|-----------------------|-------------------------------------------------|---------|
| ``CASK_DB_URL``       | SQLAlchemy database URL                         | (none)  |
| ``CASK_URL_PREFIX``   | Public URL of the web frontend, used in emails  | (none)  |
| ``CASK_SMTP_HOST``    | SMTP server host                                | localhost |
| ``CASK_SMTP_PORT``    | SMTP server port (implicit TLS)                 | 465     |
| ``CASK_SMTP_USER``    | SMTP username                                   | (none)  |
| ``CASK_SMTP_PASS``    | SMTP password                                   | (none)  |
| ``CASK_SMTP_FROM``    | Sender address                                  | (none)  |
| ``CASK_SMTP_FROM_NAME`` | Sender display name                           | Cask    |

Email is enabled only when both ``CASK_URL_PREFIX`` and ``CASK_SMTP_FROM``
are set.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

DB_URL_ENV = "CASK_DB_URL"  # pragma: no mutate

ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate

DEFAULT_SMTP_HOST = "localhost"
DEFAULT_SMTP_PORT = 465
DEFAULT_FROM_NAME = "Cask"


class DatabaseUrlNotSetError(Exception):
    """Raised when the CASK_DB_URL environment variable is not set."""


class InvalidSettingError(Exception):
    """Raised when an environment variable holds an unusable value."""


def get_db_url() -> str:
    """Get the database URL from the environment.

    Returns:
        The value of the `CASK_DB_URL` environment variable.

    Raises:
        DatabaseUrlNotSetError: If `CASK_DB_URL` is not set.
    """
    if not (url := os.environ.get(DB_URL_ENV)):
        raise DatabaseUrlNotSetError
    return url


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Build an Alembic `Config` object for CASK's migrations.

    Args:
        db_url: SQLAlchemy database URL. Can be `None` only where Alembic
            won't need to connect (e.g. ``heads`` and ``history``).
        stdout: Text stream Alembic will write status lines to.

    Returns:
        An `alembic.config.Config` pointing to the packaged migration scripts.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    cfg.set_main_option(
        ALEMBIC_SCRIPT_LOCATION_KEY,
        str(files("cask.adapters.db.alembic")),
    )
    return cfg


@dataclass(frozen=True, slots=True)
class EmailSettings:
    """SMTP and link settings for outbound email."""

    url_prefix: str
    from_address: str
    from_name: str = DEFAULT_FROM_NAME
    host: str = DEFAULT_SMTP_HOST
    port: int = DEFAULT_SMTP_PORT
    username: str | None = None
    password: str | None = None


def get_email_settings(environ: Mapping[str, str] | None = None) -> EmailSettings | None:
    """Read email settings from the environment.

    Returns:
        The settings, or ``None`` when email is not configured.

    Raises:
        InvalidSettingError: If ``CASK_SMTP_PORT`` is not an integer.
    """
    env = os.environ if environ is None else environ

    url_prefix = env.get("CASK_URL_PREFIX")
    from_address = env.get("CASK_SMTP_FROM")
    if not url_prefix or not from_address:
        return None

    raw_port = env.get("CASK_SMTP_PORT") or str(DEFAULT_SMTP_PORT)
    try:
        port = int(raw_port)
    except ValueError as e:
        raise InvalidSettingError(f"CASK_SMTP_PORT must be an integer: {raw_port!r}") from e

    return EmailSettings(
        url_prefix=url_prefix.rstrip("/"),
        from_address=from_address,
        from_name=env.get("CASK_SMTP_FROM_NAME") or DEFAULT_FROM_NAME,
        host=env.get("CASK_SMTP_HOST") or DEFAULT_SMTP_HOST,
        port=port,
        username=env.get("CASK_SMTP_USER") or None,
        password=env.get("CASK_SMTP_PASS") or None,
    )
