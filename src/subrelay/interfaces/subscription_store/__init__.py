"""SUBRELAY Subscription Store Interface Package"""

from .errors import (
    AlreadySubscribed,
    InvalidChannelName,
    InvalidSubscriberId,
    NotSubscribed,
    StorageUnavailable,
    SubscriptionStoreError,
)
from .subscription_store import Subscription, SubscriptionStore

__all__ = [
    "AlreadySubscribed",
    "InvalidChannelName",
    "InvalidSubscriberId",
    "NotSubscribed",
    "StorageUnavailable",
    "Subscription",
    "SubscriptionStore",
    "SubscriptionStoreError",
]
