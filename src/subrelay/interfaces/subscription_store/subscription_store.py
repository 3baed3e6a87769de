"""Interface for the subscription registry.

Defines the `SubscriptionStore` abstraction: the single source of truth for
which subscriber follows which channel. Implementations must enforce pair
uniqueness atomically at the storage layer (never check-then-insert) and must
serve the per-user and per-channel listings without scanning every record.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Subscription:
    """One (subscriber, channel) follow relationship."""

    id: int  # assigned by the store, never reused
    subscriber_id: int  # opaque external identity (e.g. a Telegram chat id)
    channel_name: str
    created_at: datetime  # UTC, second precision


class SubscriptionStore(abc.ABC):
    """(subscriber, channel) registry with atomic uniqueness and indexed fan-out."""

    @abc.abstractmethod
    def subscribe(self, subscriber_id: int, channel_name: str) -> Subscription:
        """Create a subscription for the pair.

        The record gets a fresh ``id`` and the current time as ``created_at``.

        Args:
            subscriber_id: The subscribing user.
            channel_name: The channel to follow; case is preserved.

        Returns:
            Subscription: The newly created record.

        Raises:
            InvalidChannelName: If the channel name is empty or contains
                whitespace. No record is created.
            InvalidSubscriberId: If the id does not fit a signed 64-bit
                integer. No record is created.
            AlreadySubscribed: If the pair already exists.
            StorageUnavailable: If the storage cannot be reached.
        """

    @abc.abstractmethod
    def unsubscribe(self, subscriber_id: int, channel_name: str) -> None:
        """Remove the subscription for the pair.

        Args:
            subscriber_id: The subscribing user.
            channel_name: The followed channel.

        Raises:
            InvalidChannelName: If the channel name is empty or contains
                whitespace (no such record can exist).
            InvalidSubscriberId: If the id does not fit a signed 64-bit
                integer (no such record can exist).
            NotSubscribed: If no record matches the pair.
            StorageUnavailable: If the storage cannot be reached.
        """

    @abc.abstractmethod
    def exists(self, subscriber_id: int, channel_name: str) -> bool:
        """Return True if the subscriber follows the channel (never raises on bad input)."""

    @abc.abstractmethod
    def list_by_user(self, subscriber_id: int) -> list[str]:
        """List a subscriber's channel names, oldest subscription first.

        Returns an empty list for unknown subscribers, including ids that
        could never have been stored.
        """

    @abc.abstractmethod
    def list_subscribers(self, channel_name: str) -> list[int]:
        """List the subscriber ids following a channel, oldest subscription first.

        This is the fan-out path. Returns an empty list for unknown (or
        invalid) channel names.
        """

    @abc.abstractmethod
    def list_all(self) -> list[Subscription]:
        """List every subscription, ordered by channel name then subscriber id."""

    @abc.abstractmethod
    def list_all_subscribers(self) -> list[int]:
        """List each distinct subscriber id across all channels, ascending."""
