"""Exceptions for subscription store operations.

``InvalidChannelName`` and ``InvalidSubscriberId`` are domain errors; they are
re-exported here because every write operation of the store may raise them.
"""

from subrelay.domain.errors import InvalidChannelName, InvalidSubscriberId

__all__ = [
    "AlreadySubscribed",
    "InvalidChannelName",
    "InvalidSubscriberId",
    "NotSubscribed",
    "StorageUnavailable",
    "SubscriptionStoreError",
]


class SubscriptionStoreError(Exception):
    """Base class for subscription store errors."""


class AlreadySubscribed(SubscriptionStoreError):
    """Conflict: the subscriber already follows the channel.

    Attributes:
        subscriber_id (int): The subscriber that already follows the channel.
        channel_name (str): The channel being followed.
    """

    def __init__(self, subscriber_id: int, channel_name: str):
        super().__init__(
            f"Subscriber {subscriber_id} is already subscribed to '{channel_name}'."
        )
        self.subscriber_id = subscriber_id
        self.channel_name = channel_name


class NotSubscribed(SubscriptionStoreError):
    """Conflict: the subscriber does not follow the channel.

    Attributes:
        subscriber_id (int): The subscriber named in the request.
        channel_name (str): The channel named in the request.
    """

    def __init__(self, subscriber_id: int, channel_name: str):
        super().__init__(
            f"Subscriber {subscriber_id} is not subscribed to '{channel_name}'."
        )
        self.subscriber_id = subscriber_id
        self.channel_name = channel_name


class StorageUnavailable(SubscriptionStoreError):
    """The durable storage could not be reached or did not answer.

    This is a retryable fault. The store never retries on its own; retry
    policy and backoff belong to the caller.
    """
