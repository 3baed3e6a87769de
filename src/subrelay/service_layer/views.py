"""Read-side views over the subscription store.

Each view opens the unit of work for a single read and leaves it without
committing. ``list_subscribers`` goes through the fan-out cache when one is
supplied.
"""

from __future__ import annotations

from subrelay.interfaces.subscription_store import Subscription
from subrelay.interfaces.unit_of_work import AbstractUnitOfWork

from .cache import SubscriberCache


def list_by_user(subscriber_id: int, uow: AbstractUnitOfWork) -> list[str]:
    """Channel names a subscriber follows, oldest first."""
    with uow:
        return uow.subscriptions.list_by_user(subscriber_id)


def list_subscribers(
    channel_name: str, uow: AbstractUnitOfWork, cache: SubscriberCache | None = None
) -> list[int]:
    """Subscriber ids following a channel, oldest first."""

    def _load(name: str) -> list[int]:
        with uow:
            return uow.subscriptions.list_subscribers(name)

    if cache is None:
        return _load(channel_name)
    return cache.get_or_load(channel_name, _load)


def exists(subscriber_id: int, channel_name: str, uow: AbstractUnitOfWork) -> bool:
    """Whether the subscriber follows the channel."""
    with uow:
        return uow.subscriptions.exists(subscriber_id, channel_name)


def list_all(uow: AbstractUnitOfWork) -> list[Subscription]:
    """Every subscription, ordered by channel then subscriber."""
    with uow:
        return uow.subscriptions.list_all()
