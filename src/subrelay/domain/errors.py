"""Domain-layer error definitions."""


class DomainError(Exception):
    """Base class for domain-layer errors."""


class InvalidChannelName(DomainError):
    """Raised when a channel name is empty or contains whitespace.

    Attributes:
        channel_name (str): The rejected channel name.
    """

    def __init__(self, channel_name: str) -> None:
        super().__init__(
            f"Invalid channel name {channel_name!r}: "
            "must be non-empty and contain no whitespace."
        )
        self.channel_name = channel_name


class InvalidMessage(DomainError):
    """Raised when an outgoing message is empty or too long.

    Attributes:
        reason (str): Why the message was rejected.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid message: {reason}.")
        self.reason = reason


class InvalidSubscriberId(DomainError):
    """Raised when a subscriber id does not fit a signed 64-bit integer.

    Attributes:
        subscriber_id (int): The rejected subscriber id.
    """

    def __init__(self, subscriber_id: int) -> None:
        super().__init__(
            f"Invalid subscriber id {subscriber_id}: "
            "must fit in a signed 64-bit integer."
        )
        self.subscriber_id = subscriber_id
