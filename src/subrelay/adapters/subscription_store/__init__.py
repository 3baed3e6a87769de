"""Subscription store adapters.

- ``SqlAlchemySubscriptionStore``: durable store on SQLite or PostgreSQL.
- ``InMemorySubscriptionStore``: thread-safe, non-durable store for tests and
  ephemeral runs.
"""

from .memory import InMemorySubscriptionStore
from .sqlalchemy_store import SqlAlchemySubscriptionStore

__all__ = ["InMemorySubscriptionStore", "SqlAlchemySubscriptionStore"]
