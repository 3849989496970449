"""Classify `IntegrityError`s raised by PostgreSQL and SQLite.

The two backends word constraint violations differently:

- PostgreSQL names the violated constraint, e.g.
  ``duplicate key value violates unique constraint "uq_bottle_tag_bottle_id_tag"``.
- SQLite lists the columns, e.g.
  ``UNIQUE constraint failed: bottle_tag.bottle_id, bottle_tag.tag``.

Constraint names come from the shared naming convention, so both forms can be
matched from the table name and its key columns.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError

EMPTY_STRING = ""  # pragma: no mutate


def integrity_message(error: IntegrityError) -> str:
    """Return the driver's message for ``error``, lowercased."""
    msg = (
        str(error.orig) if error.orig not in (None, EMPTY_STRING) else str(error)
    )
    return msg.lower()


def is_unique_violation(
    error: IntegrityError, table: str, columns: Sequence[str]
) -> bool:
    """True if ``error`` is a unique violation on ``table(columns)``."""
    msg = integrity_message(error)
    if "unique" not in msg:
        return False
    if f"uq_{table}_{'_'.join(columns)}" in msg:
        return True
    return all(f"{table}.{column}" in msg for column in columns)


def is_foreign_key_violation(error: IntegrityError) -> bool:
    """True if ``error`` reports a foreign key violation."""
    return "foreign key" in integrity_message(error)
