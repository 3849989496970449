"""Service layer for CASK.

Commands, their handlers, the message bus that dispatches them, and the
error taxonomy entrypoints translate into responses.

Dependency rule: may import `cask.domain` and `cask.interfaces`; must not
import adapters, bootstrap or entrypoints.
"""
