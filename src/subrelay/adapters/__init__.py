"""Concrete adapters for SUBRELAY's ports (storage, units of work, notifiers)."""
