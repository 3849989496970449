"""Ports (abstract interfaces) for CASK.

Framework-free ABCs describing the stores, the mailer and the unit of work
that the service layer depends on. Adapters implement them.

Dependency rule: may import `cask.domain`; must not import adapters,
bootstrap or entrypoints.
"""
