"""Utility enums and helpers for database dialect handling.

Supported backends are named once here so dialect checks elsewhere are
type-safe. ``insert_for`` hands back the dialect's own ``insert`` construct,
which is the one that knows ``ON CONFLICT DO NOTHING``.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.engine import Connection, Engine
    from sqlalchemy.sql.dml import Insert


class UnsupportedDialect(Exception):
    """Raised when an unsupported database dialect is encountered."""


class DialectName(str, Enum):
    """Enumeration of supported SQLAlchemy dialect names.

    Attributes:
        POSTGRES: PostgreSQL dialect (``"postgresql"``).
        SQLITE:   SQLite dialect (``"sqlite"``).
    """

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Normalize an arbitrary dialect string to DialectName.

        Accepts common aliases and driver-qualified names (e.g. 'postgres',
        'postgresql+psycopg', 'sqlite+pysqlite').

        Raises:
            UnsupportedDialect: if the dialect is not recognized.
        """
        raw = (dialect_str or "").strip().lower()
        base = raw.split("+", 1)[0]

        if base in {"postgres", "postgresql", "pg"}:
            return cls.POSTGRES
        if base == "sqlite":
            return cls.SQLITE

        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Extract the dialect from a SQLAlchemy Engine or Connection.

        Raises:
            UnsupportedDialect: if the object has no dialect or it is not supported.
        """
        try:
            name = obj.dialect.name
        except AttributeError as e:
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            ) from e
        return cls.from_string(name)


_INSERTS: dict[DialectName, Callable[[Table], Insert]] = {
    DialectName.POSTGRES: pg_insert,
    DialectName.SQLITE: sqlite_insert,
}


def insert_for(dialect: DialectName, table: Table) -> Insert:
    """Return a dialect-specific INSERT for *table* (supports ``on_conflict_do_nothing``)."""
    return _INSERTS[dialect](table)
