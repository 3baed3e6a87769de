"""Database engine factory and helpers.

This module centralizes creation of SQLAlchemy Engines and applies
backend-specific tuning:

- **SQLite**: connection PRAGMAs for WAL journaling, balanced durability and
  in-memory temp storage, plus a busy timeout so concurrent writers wait for
  the write lock instead of failing immediately.
- **Other backends**: no tuning applied here.

Use this module whenever you need an Engine so that all connections are
consistently configured.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Engine

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}
SQLITE_BUSY_TIMEOUT_S = 30.0


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite."""
    u = make_url(str(url))
    return u.get_backend_name() in SQLITE_NAMES


def make_engine(
    url: str | URL, *, echo: bool = False, busy_timeout: float = SQLITE_BUSY_TIMEOUT_S
) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    For SQLite the following PRAGMAs are applied on every new connection:
        - ``foreign_keys=ON``
        - ``journal_mode=WAL`` (readers don't block the writer and vice versa)
        - ``synchronous=NORMAL``
        - ``temp_store=MEMORY``

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.
        busy_timeout: SQLite only; seconds a connection waits for the write lock.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """
    if not is_sqlite(url):
        return create_engine(url, echo=echo)

    engine = create_engine(url, echo=echo, connect_args={"timeout": busy_timeout})

    @event.listens_for(engine, "connect")
    def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA journal_mode=WAL;")
        cur.execute("PRAGMA synchronous=NORMAL;")
        cur.execute("PRAGMA temp_store=MEMORY;")
        cur.close()

    return engine
