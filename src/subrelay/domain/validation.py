"""Validation rules for channel names, subscriber ids and outgoing messages.

Channel names are opaque tokens: any non-empty string without whitespace is
accepted and its case is preserved exactly as given.

Subscriber ids are opaque, but must fit the signed 64-bit storage column.
"""

from .errors import InvalidChannelName, InvalidMessage, InvalidSubscriberId

MAX_MESSAGE_LENGTH = 1000

# telegram_id is a BIGINT column
MIN_SUBSCRIBER_ID = -(2**63)
MAX_SUBSCRIBER_ID = 2**63 - 1


def is_valid_channel_name(channel_name: str) -> bool:
    """Return True if *channel_name* is non-empty and has no whitespace."""
    return bool(channel_name) and not any(ch.isspace() for ch in channel_name)


def ensure_valid_channel_name(channel_name: str) -> str:
    """Return *channel_name* unchanged, or raise if it is not valid.

    Raises:
        InvalidChannelName: If the name is empty or contains whitespace.
    """
    if not is_valid_channel_name(channel_name):
        raise InvalidChannelName(channel_name)
    return channel_name


def is_valid_subscriber_id(subscriber_id: int) -> bool:
    """Return True if *subscriber_id* fits a signed 64-bit integer."""
    return MIN_SUBSCRIBER_ID <= subscriber_id <= MAX_SUBSCRIBER_ID


def ensure_valid_subscriber_id(subscriber_id: int) -> int:
    """Return *subscriber_id* unchanged, or raise if it cannot be stored.

    Raises:
        InvalidSubscriberId: If the id is outside the signed 64-bit range.
    """
    if not is_valid_subscriber_id(subscriber_id):
        raise InvalidSubscriberId(subscriber_id)
    return subscriber_id


def ensure_valid_message(message: str) -> str:
    """Return *message* unchanged, or raise if it cannot be sent.

    Raises:
        InvalidMessage: If the message is empty or longer than
            ``MAX_MESSAGE_LENGTH`` characters.
    """
    if not message:
        raise InvalidMessage("message cannot be empty")
    if len(message) > MAX_MESSAGE_LENGTH:
        raise InvalidMessage(f"message too long (max {MAX_MESSAGE_LENGTH} chars)")
    return message
