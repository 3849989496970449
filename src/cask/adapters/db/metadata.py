"""Shared SQLAlchemy `MetaData` for every CASK table.

Constraint and index names are derived from a naming convention so that the
Alembic migrations and ``metadata.create_all()`` produce identical names. The
stores rely on this: unique violations are recognized by constraint name
(e.g. ``uq_tasting_bottle_id_created_by_id_created_at``).

Naming convention:
    - Indexes:       ix_<table>_<col...>
    - Unique:        uq_<table>_<col...>
    - Check:         ck_<table>_<constraint_name>
    - Foreign keys:  fk_<table>_<col...>_<reftable>
    - Primary key:   pk_<table>
"""

from sqlalchemy import MetaData

#: All CASK tables attach to this metadata object.
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_N_label)s",
        "uq": "uq_%(table_name)s_%(column_0_N_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_N_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)
