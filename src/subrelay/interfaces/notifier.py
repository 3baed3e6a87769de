"""Interface for delivering fan-out notifications.

The transport (a chat bot, a webhook, a queue) lives outside SUBRELAY; this
port is the narrow seam the fan-out handlers call once per subscriber.
"""

import abc

# pylint: disable=too-few-public-methods


class NotificationFailed(Exception):
    """Raised by a notifier when a single delivery fails.

    Attributes:
        subscriber_id (int): The recipient that could not be reached.
    """

    def __init__(self, subscriber_id: int, reason: str = "delivery failed"):
        super().__init__(f"Could not notify subscriber {subscriber_id}: {reason}")
        self.subscriber_id = subscriber_id
        self.reason = reason


class Notifier(abc.ABC):
    """Contract for a notification transport."""

    @abc.abstractmethod
    def send(self, subscriber_id: int, message: str) -> None:
        """Deliver *message* to *subscriber_id*.

        Raises:
            NotificationFailed: If the message could not be delivered.
        """
