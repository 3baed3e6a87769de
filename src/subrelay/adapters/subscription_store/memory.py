"""In-memory SubscriptionStore implementation.

Records live in two dict indexes (by subscriber and by channel), so every
query is a dictionary lookup rather than a scan. All reads and writes go
through one ``RLock``; the critical sections are pure dict operations, so no
caller holds the lock for longer than a lookup or an insert.

Data is lost when the instance is discarded. Use for unit tests, prototyping,
or runs where durability does not matter.
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable
from datetime import datetime

from subrelay.domain import ensure_valid_channel_name, ensure_valid_subscriber_id
from subrelay.domain.utils import utc_now
from subrelay.interfaces.subscription_store import (
    AlreadySubscribed,
    NotSubscribed,
    Subscription,
    SubscriptionStore,
)


class InMemorySubscriptionStore(SubscriptionStore):
    """Thread-safe, non-durable SubscriptionStore."""

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._lock = threading.RLock()
        self._clock = clock
        self._ids = itertools.count(1)
        # insertion-ordered, so iteration order is creation order
        self._by_user: dict[int, dict[str, Subscription]] = {}
        self._by_channel: dict[str, dict[int, Subscription]] = {}

    # --- writes ---

    def subscribe(self, subscriber_id: int, channel_name: str) -> Subscription:
        ensure_valid_subscriber_id(subscriber_id)
        ensure_valid_channel_name(channel_name)

        with self._lock:
            channels = self._by_user.setdefault(subscriber_id, {})
            if channel_name in channels:
                raise AlreadySubscribed(subscriber_id, channel_name)
            subscription = Subscription(
                id=next(self._ids),
                subscriber_id=subscriber_id,
                channel_name=channel_name,
                created_at=self._clock(),
            )
            channels[channel_name] = subscription
            self._by_channel.setdefault(channel_name, {})[subscriber_id] = subscription
        return subscription

    def unsubscribe(self, subscriber_id: int, channel_name: str) -> None:
        ensure_valid_subscriber_id(subscriber_id)
        ensure_valid_channel_name(channel_name)

        with self._lock:
            channels = self._by_user.get(subscriber_id, {})
            if channels.pop(channel_name, None) is None:
                raise NotSubscribed(subscriber_id, channel_name)
            if not channels:
                del self._by_user[subscriber_id]

            subscribers = self._by_channel[channel_name]
            del subscribers[subscriber_id]
            if not subscribers:
                del self._by_channel[channel_name]

    # --- lookups ---

    def exists(self, subscriber_id: int, channel_name: str) -> bool:
        with self._lock:
            return channel_name in self._by_user.get(subscriber_id, {})

    def list_by_user(self, subscriber_id: int) -> list[str]:
        with self._lock:
            return list(self._by_user.get(subscriber_id, {}))

    def list_subscribers(self, channel_name: str) -> list[int]:
        with self._lock:
            return list(self._by_channel.get(channel_name, {}))

    def list_all(self) -> list[Subscription]:
        with self._lock:
            records = [
                subscription
                for subscribers in self._by_channel.values()
                for subscription in subscribers.values()
            ]
        return sorted(records, key=lambda s: (s.channel_name, s.subscriber_id))

    def list_all_subscribers(self) -> list[int]:
        with self._lock:
            return sorted(self._by_user)
