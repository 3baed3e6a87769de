"""Notifier adapters.

- ``StreamNotifier`` writes one JSON object per delivery to a text stream so a
  separate transport process can consume them line by line.
- ``RecordingNotifier`` keeps deliveries in memory; it can be told to fail for
  particular subscribers.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Iterable
from typing import TextIO

from subrelay.interfaces.notifier import NotificationFailed, Notifier


class StreamNotifier(Notifier):
    """Write deliveries as JSON lines to a text stream."""

    def __init__(self, stream: TextIO):
        self.stream = stream
        self._lock = threading.Lock()

    def send(self, subscriber_id: int, message: str) -> None:
        line = json.dumps({"subscriber_id": subscriber_id, "message": message})
        try:
            with self._lock:
                self.stream.write(line + "\n")
                self.stream.flush()
        except OSError as e:
            raise NotificationFailed(subscriber_id, str(e)) from e


class RecordingNotifier(Notifier):
    """Collect deliveries in memory.

    Args:
        failing: Subscriber ids whose deliveries raise ``NotificationFailed``.
    """

    def __init__(self, failing: Iterable[int] = ()):
        self.failing = set(failing)
        self.sent: list[tuple[int, str]] = []

    def send(self, subscriber_id: int, message: str) -> None:
        if subscriber_id in self.failing:
            raise NotificationFailed(subscriber_id, "recipient unreachable")
        self.sent.append((subscriber_id, message))
