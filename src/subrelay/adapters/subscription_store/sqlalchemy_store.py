"""Implementation of SubscriptionStore using SQLAlchemy."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import delete, select
from sqlalchemy.exc import DBAPIError, OperationalError

from subrelay.adapters.db.dialects import DialectName, insert_for
from subrelay.domain import (
    ensure_valid_channel_name,
    ensure_valid_subscriber_id,
    is_valid_subscriber_id,
)
from subrelay.domain.utils import utc_now
from subrelay.interfaces.subscription_store import (
    AlreadySubscribed,
    NotSubscribed,
    StorageUnavailable,
    Subscription,
    SubscriptionStore,
)

from .schema import subscriptions

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Row


@contextmanager
def storage_errors() -> Iterator[None]:
    """Translate driver-level connectivity failures into ``StorageUnavailable``.

    Covers ``OperationalError`` and any DBAPI error that SQLAlchemy classified
    as a disconnect (``connection_invalidated``), such as an ``InterfaceError``
    from a dropped Postgres connection. Other DBAPI errors propagate unchanged.
    """
    try:
        yield
    except DBAPIError as e:
        if not (isinstance(e, OperationalError) or e.connection_invalidated):
            raise
        raise StorageUnavailable(str(e.orig or e)) from e


class SqlAlchemySubscriptionStore(SubscriptionStore):
    """SubscriptionStore bound to one SQLAlchemy connection (Postgres or SQLite).

    Transaction boundaries belong to the caller (see ``SqlAlchemyUnitOfWork``).
    Every operation is a single statement, so pair uniqueness is arbitrated by
    the database's unique constraint rather than by a read-then-write.
    """

    def __init__(
        self, connection: Connection, clock: Callable[[], datetime] = utc_now
    ):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)
        self._clock = clock

    # --- writes ---

    def subscribe(self, subscriber_id: int, channel_name: str) -> Subscription:
        ensure_valid_subscriber_id(subscriber_id)
        ensure_valid_channel_name(channel_name)

        stmt = (
            insert_for(self.dialect, subscriptions)
            .values(
                telegram_id=subscriber_id,
                channel_name=channel_name,
                created_at=self._clock(),
            )
            .on_conflict_do_nothing(
                index_elements=[subscriptions.c.telegram_id, subscriptions.c.channel_name]
            )
            .returning(subscriptions)
        )
        with storage_errors():
            row = self.connection.execute(stmt).first()

        # No row back means the unique constraint swallowed the insert.
        if row is None:
            raise AlreadySubscribed(subscriber_id, channel_name)
        return self._to_subscription(row)

    def unsubscribe(self, subscriber_id: int, channel_name: str) -> None:
        ensure_valid_subscriber_id(subscriber_id)
        ensure_valid_channel_name(channel_name)

        stmt = delete(subscriptions).where(
            subscriptions.c.telegram_id == subscriber_id,
            subscriptions.c.channel_name == channel_name,
        )
        with storage_errors():
            result = self.connection.execute(stmt)

        if result.rowcount == 0:
            raise NotSubscribed(subscriber_id, channel_name)

    # --- lookups ---

    def exists(self, subscriber_id: int, channel_name: str) -> bool:
        if not is_valid_subscriber_id(subscriber_id):
            return False
        stmt = select(subscriptions.c.id).where(
            subscriptions.c.telegram_id == subscriber_id,
            subscriptions.c.channel_name == channel_name,
        )
        with storage_errors():
            return self.connection.execute(stmt).first() is not None

    def list_by_user(self, subscriber_id: int) -> list[str]:
        if not is_valid_subscriber_id(subscriber_id):
            return []
        stmt = (
            select(subscriptions.c.channel_name)
            .where(subscriptions.c.telegram_id == subscriber_id)
            .order_by(subscriptions.c.created_at, subscriptions.c.id)
        )
        with storage_errors():
            return list(self.connection.execute(stmt).scalars())

    def list_subscribers(self, channel_name: str) -> list[int]:
        stmt = (
            select(subscriptions.c.telegram_id)
            .where(subscriptions.c.channel_name == channel_name)
            .order_by(subscriptions.c.created_at, subscriptions.c.id)
        )
        with storage_errors():
            return [int(sid) for sid in self.connection.execute(stmt).scalars()]

    def list_all(self) -> list[Subscription]:
        stmt = select(subscriptions).order_by(
            subscriptions.c.channel_name, subscriptions.c.telegram_id
        )
        with storage_errors():
            return [self._to_subscription(row) for row in self.connection.execute(stmt)]

    def list_all_subscribers(self) -> list[int]:
        stmt = (
            select(subscriptions.c.telegram_id)
            .distinct()
            .order_by(subscriptions.c.telegram_id)
        )
        with storage_errors():
            return [int(sid) for sid in self.connection.execute(stmt).scalars()]

    # --- helpers ---

    @staticmethod
    def _to_subscription(row: Row) -> Subscription:
        return Subscription(
            id=int(row.id),
            subscriber_id=int(row.telegram_id),
            channel_name=row.channel_name,
            created_at=row.created_at,
        )
