"""Bootstrap (composition root) for SUBRELAY.

Assembles the application at runtime: wires concrete adapters to the
service-layer handlers, composes the shared services (message bus, unit of
work, fan-out cache) and reads configuration.

Import rules:
- Entry points import *this* package for wiring. They may also import
  command types, read views and error classes. Only the `db` CLI group
  touches the engine factory directly (for Alembic and connectivity checks).
  Notifiers are obtained through `stream_notifier`.
- This package may import: `subrelay.adapters`, `subrelay.service_layer`,
  `subrelay.interfaces`, `subrelay.domain`, and `subrelay.config`.
- Inner layers must not import `subrelay.bootstrap`.
"""

from .bootstrap import (
    AppContainer,
    bootstrap,
    build_message_bus,
    inject_dependencies,
    stream_notifier,
)

__all__ = [
    "AppContainer",
    "bootstrap",
    "build_message_bus",
    "inject_dependencies",
    "stream_notifier",
]
