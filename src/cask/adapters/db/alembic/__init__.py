"""Alembic migration environment for CASK (packaged with the library)."""
