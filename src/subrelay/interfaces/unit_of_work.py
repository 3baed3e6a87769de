"""Unit of Work interface for SUBRELAY.

Defines the AbstractUnitOfWork contract: a context-managed unit of work
exposing a SubscriptionStore and abstract commit/rollback methods.
"""

from __future__ import annotations

import abc

from .subscription_store import SubscriptionStore


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work."""

    subscriptions: SubscriptionStore

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here.
        """
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back whatever was not committed.
        """
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction."""

    @abc.abstractmethod
    def rollback(self):
        """Revert uncommitted changes."""
