"""Subscription registry schema.

Defines the ``subscriptions`` table: one row per (subscriber, channel) follow
relationship.

Constraints (enforced here):

| Constraint                              | Purpose                                   |
|-----------------------------------------|-------------------------------------------|
| PRIMARY KEY(id), AUTOINCREMENT/IDENTITY | ids are never reused after a delete       |
| UNIQUE(telegram_id, channel_name)       | one row per pair; backs per-user lookups  |
| INDEX(channel_name)                     | fan-out lookups without a full scan       |
| CHECK(valid channel name)               | non-empty, no embedded spaces (backstop)  |

The application rejects any whitespace in channel names before writing; the
CHECK constraint is a last line of defence against direct writes.
"""

from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Identity,
    Index,
    Table,
    Text,
    UniqueConstraint,
)

from subrelay.adapters.db.metadata import metadata
from subrelay.adapters.db.sa_types import BIGINT_PK, EpochSeconds

__all__ = ["subscriptions"]

subscriptions = Table(
    "subscriptions",
    metadata,
    Column(
        "id",
        BIGINT_PK,
        Identity(start=1),
        primary_key=True,
        comment="Surrogate id, assigned by the database and never reused.",
    ),
    Column(
        "telegram_id",
        BigInteger,
        nullable=False,
        comment="Opaque subscriber id (external identity space).",
    ),
    Column(
        "channel_name",
        Text,
        nullable=False,
        comment="Channel token; case preserved, no whitespace.",
    ),
    Column(
        "created_at",
        EpochSeconds(),
        nullable=False,
        comment="Creation time in epoch seconds, assigned at insert.",
    ),
    UniqueConstraint("telegram_id", "channel_name"),
    CheckConstraint(
        "length(channel_name) > 0 AND channel_name NOT LIKE '% %'",
        name="valid_channel_name",
    ),
    Index(None, "channel_name"),
    sqlite_autoincrement=True,
    comment="Subscription registry. One row per (subscriber, channel) pair.",
)
