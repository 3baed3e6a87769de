"""Backends for the SubscriptionStore contract tests.

Every backend is reached through ``request.getfixturevalue`` so that only the
selected engine fixture is instantiated; the Postgres variants are skipped as a
whole when Docker is unavailable, without touching the others.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import TYPE_CHECKING

import pytest

from subrelay.adapters.subscription_store import (
    InMemorySubscriptionStore,
    SqlAlchemySubscriptionStore,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from subrelay.interfaces.subscription_store import SubscriptionStore

# pylint: disable=redefined-outer-name

ENGINE_FIXTURES = {
    "sql_memory": "sqlite_engine_memory",
    "sql_file": "sqlite_engine_file",
    "postgres": "postgres_engine",
}


class Backend:
    """Hands out stores that all see the same underlying records.

    ``open()`` yields a store for one unit of work and commits when the block
    exits cleanly. Each thread should open its own.
    """

    def __init__(
        self,
        name: str,
        clock: Callable[[], datetime],
        engine: Engine | None = None,
    ):
        self.name = name
        self.engine = engine
        self._clock = clock
        self._memory = InMemorySubscriptionStore(clock=clock) if engine is None else None

    @contextmanager
    def open(self) -> Iterator[SubscriptionStore]:
        if self._memory is not None:
            yield self._memory
            return
        with self.engine.connect() as connection:
            yield SqlAlchemySubscriptionStore(connection, clock=self._clock)
            connection.commit()


def _make_backend(request: pytest.FixtureRequest, clock) -> Backend:
    name = request.param
    if name == "memory":
        return Backend(name, clock)
    engine = request.getfixturevalue(ENGINE_FIXTURES[name])
    with engine.connect():  # warm up: applies PRAGMAs once before any threads start
        pass
    return Backend(name, clock, engine)


@pytest.fixture(params=["memory", "sql_memory", "sql_file", "postgres"])
def backend(request: pytest.FixtureRequest, clock) -> Backend:
    """Every SubscriptionStore backend."""
    return _make_backend(request, clock)


@pytest.fixture(params=["memory", "sql_file", "postgres"])
def threaded_backend(request: pytest.FixtureRequest, clock) -> Backend:
    """Backends whose records are shared across threads.

    ``sql_memory`` is left out: SQLAlchemy gives each thread its own
    ``:memory:`` database.
    """
    return _make_backend(request, clock)


@pytest.fixture
def store(backend: Backend) -> Iterator[SubscriptionStore]:
    """A single store (one connection for SQL backends) for the whole test."""
    with backend.open() as s:
        yield s
