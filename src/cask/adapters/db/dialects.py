"""Utility enums and helpers for database dialect handling.

CASK runs against PostgreSQL in production and SQLite in development and
tests. Both support ``INSERT ... ON CONFLICT``, which the stores use for the
tag and award upserts, but SQLAlchemy exposes it through dialect-specific
``insert`` constructs. `upsert_insert` picks the right one.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.dialects.postgresql import Insert as PgInsert
    from sqlalchemy.dialects.sqlite import Insert as SqliteInsert
    from sqlalchemy.engine import Connection, Engine


class UnsupportedDialect(Exception):
    """Raised when an unsupported database dialect is encountered."""


class DialectName(str, Enum):
    """Enumeration of supported SQLAlchemy dialect names.

    Attributes:
        POSTGRES: PostgreSQL dialect (``"postgresql"``).
        SQLITE:   SQLite dialect (``"sqlite"``).
    """

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Normalize an arbitrary dialect string to a DialectName.

        Accepts common aliases and driver-qualified names (e.g. 'postgres',
        'postgresql+psycopg', 'sqlite+pysqlite').

        Raises:
            UnsupportedDialect: if the dialect is not recognized or supported.
        """

        base = (dialect_str or "").strip().lower().split("+", 1)[0]

        if base in {"postgres", "postgresql", "pg"}:
            return cls.POSTGRES
        if base == "sqlite":
            return cls.SQLITE

        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Extract the dialect from a SQLAlchemy Engine or Connection.

        Raises:
            UnsupportedDialect: if the dialect is not recognized or supported.
        """
        try:
            name = obj.dialect.name
        except AttributeError as e:
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            ) from e
        return cls.from_string(name)


def upsert_insert(connection: Connection, table: Table) -> PgInsert | SqliteInsert:
    """Return an ``insert()`` for ``table`` that supports ``on_conflict_*``.

    Args:
        connection: The connection the statement will run on.
        table: The target table.

    Raises:
        UnsupportedDialect: if the connection's dialect has no ON CONFLICT support here.
    """
    match DialectName.from_sqlalchemy(connection):
        case DialectName.POSTGRES:
            return pg_insert(table)
        case DialectName.SQLITE:
            return sqlite_insert(table)
    # Unreachable: from_sqlalchemy already rejects other dialects.
    raise UnsupportedDialect(connection.dialect.name)  # pragma: no cover
