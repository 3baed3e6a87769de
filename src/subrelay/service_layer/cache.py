"""Derived fan-out cache keyed by channel name.

The store stays the source of truth. The cache only remembers the last
subscriber list loaded for a channel and forgets it whenever a write touches
that channel.

Each channel carries a generation number that ``invalidate`` bumps. ``clear``
resets every generation and bumps a cache-wide epoch instead. A load
records the generation before reading the store and only installs its result
if the generation is unchanged afterwards, so a slow reader cannot put back a
list that a concurrent write has already made stale.
"""

from __future__ import annotations

import threading
from collections.abc import Callable


class SubscriberCache:
    """Thread-safe, invalidate-on-write cache of channel subscriber lists.

    Between calls to ``clear`` the generation table holds one integer per
    channel name that has been invalidated.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[int, ...]] = {}
        self._generations: dict[str, int] = {}
        self._epoch = 0  # bumped by clear()

    def get_or_load(
        self, channel_name: str, load: Callable[[str], list[int]]
    ) -> list[int]:
        """Return the cached subscribers of *channel_name*, loading on a miss.

        ``load`` runs without the cache lock held.
        """
        with self._lock:
            if (cached := self._entries.get(channel_name)) is not None:
                return list(cached)
            generation = self._generation(channel_name)

        subscribers = load(channel_name)

        with self._lock:
            if self._generation(channel_name) == generation:
                self._entries[channel_name] = tuple(subscribers)
        return subscribers

    def invalidate(self, channel_name: str) -> None:
        """Drop the cached list for *channel_name* and fence in-flight loads."""
        with self._lock:
            self._entries.pop(channel_name, None)
            self._generations[channel_name] = self._generations.get(channel_name, 0) + 1

    def clear(self) -> None:
        """Drop every cached list and forget per-channel generations.

        The epoch bump fences every in-flight load, so the generation table
        can start over empty.
        """
        with self._lock:
            self._epoch += 1
            self._entries.clear()
            self._generations.clear()

    def _generation(self, channel_name: str) -> tuple[int, int]:
        return self._epoch, self._generations.get(channel_name, 0)

    def __contains__(self, channel_name: str) -> bool:
        with self._lock:
            return channel_name in self._entries
