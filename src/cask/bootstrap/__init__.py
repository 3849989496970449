"""Bootstrap (composition root) for CASK.

Assembles the application at runtime: wires concrete adapters to
service-layer handlers, composes the message bus and unit of work, and reads
configuration.

Import rules:
- Entry points import *this* package (not adapters/service_layer internals).
- This package may import: `cask.adapters`, `cask.service_layer`,
  `cask.interfaces`, `cask.domain`, and `cask.config`.
- Inner layers must not import `cask.bootstrap`.
"""

from .bootstrap import (
    AppContainer,
    bootstrap,
    build_mailer,
    build_message_bus,
    inject_dependencies,
)

__all__ = [
    "AppContainer",
    "bootstrap",
    "build_mailer",
    "build_message_bus",
    "inject_dependencies",
]
