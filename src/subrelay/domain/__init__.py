"""Domain rules for SUBRELAY: what makes a channel name, a subscriber id or an outgoing message valid."""

from .errors import DomainError, InvalidChannelName, InvalidMessage, InvalidSubscriberId
from .validation import (
    MAX_MESSAGE_LENGTH,
    MAX_SUBSCRIBER_ID,
    MIN_SUBSCRIBER_ID,
    ensure_valid_channel_name,
    ensure_valid_message,
    ensure_valid_subscriber_id,
    is_valid_channel_name,
    is_valid_subscriber_id,
)

__all__ = [
    "MAX_MESSAGE_LENGTH",
    "MAX_SUBSCRIBER_ID",
    "MIN_SUBSCRIBER_ID",
    "DomainError",
    "InvalidChannelName",
    "InvalidMessage",
    "InvalidSubscriberId",
    "ensure_valid_channel_name",
    "ensure_valid_message",
    "ensure_valid_subscriber_id",
    "is_valid_channel_name",
    "is_valid_subscriber_id",
]
