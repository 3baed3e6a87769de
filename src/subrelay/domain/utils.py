"""Domain layer utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time, truncated to whole seconds (the precision the store keeps)."""
    return datetime.now(timezone.utc).replace(microsecond=0)
