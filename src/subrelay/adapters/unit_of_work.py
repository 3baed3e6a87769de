"""Units of Work for SUBRELAY.

- ``SqlAlchemyUnitOfWork``: one connection and transaction per entering
  thread, so a single instance can be shared by concurrent callers.
- ``InMemoryUnitOfWork``: wraps an ``InMemorySubscriptionStore``. Store
  operations apply immediately; commit and rollback only record intent.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from subrelay.adapters.subscription_store import (
    InMemorySubscriptionStore,
    SqlAlchemySubscriptionStore,
)
from subrelay.adapters.subscription_store.sqlalchemy_store import storage_errors
from subrelay.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

    from subrelay.interfaces.subscription_store import SubscriptionStore


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work.

    Connection state is thread-local: each thread that enters the unit gets
    its own connection, so transactions from concurrent callers never mix.
    Re-entering on the same thread before exiting is not supported.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._local = threading.local()

    @property
    def connection(self) -> Connection:
        """The calling thread's connection (only valid inside ``with uow:``)."""
        return self._local.connection

    @property
    def subscriptions(self) -> SubscriptionStore:  # type: ignore[override]
        """The calling thread's store (only valid inside ``with uow:``)."""
        return self._local.subscriptions

    def __enter__(self):
        with storage_errors():
            connection = self.engine.connect()
        self._local.connection = connection
        self._local.subscriptions = SqlAlchemySubscriptionStore(connection)
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self._local.connection.close()
            del self._local.subscriptions
            del self._local.connection

    def commit(self):
        with storage_errors():
            self.connection.commit()

    def rollback(self):
        with storage_errors():
            self.connection.rollback()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Unit of Work over an in-memory store, for tests and ephemeral runs."""

    def __init__(self, store: InMemorySubscriptionStore | None = None):
        self.subscriptions = store if store is not None else InMemorySubscriptionStore()
        self.committed = False

    def commit(self):
        self.committed = True

    def rollback(self):
        pass
