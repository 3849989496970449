"""Adapters (outbound) for CASK.

Concrete implementations of the ports in `cask.interfaces`: SQLAlchemy Core
stores for Postgres and SQLite, in-memory stores for tests and tooling, the
SQLAlchemy unit of work and the SMTP mailer.

Dependency rule: may import `cask.interfaces` and `cask.domain`; must not
import the service layer, bootstrap or entrypoints.
"""
