"""create subscriptions table

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2025-11-02 14:21:07.518302

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "subscriptions",
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            sa.Identity(start=1),
            nullable=False,
            comment="Surrogate id, assigned by the database and never reused.",
        ),
        sa.Column(
            "telegram_id",
            sa.BigInteger(),
            nullable=False,
            comment="Opaque subscriber id (external identity space).",
        ),
        sa.Column(
            "channel_name",
            sa.Text(),
            nullable=False,
            comment="Channel token; case preserved, no whitespace.",
        ),
        sa.Column(
            "created_at",
            sa.BigInteger(),
            nullable=False,
            comment="Creation time in epoch seconds, assigned at insert.",
        ),
        sa.CheckConstraint(
            "length(channel_name) > 0 AND channel_name NOT LIKE '% %'",
            name=op.f("ck_subscriptions_valid_channel_name"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_subscriptions")),
        sa.UniqueConstraint(
            "telegram_id",
            "channel_name",
            name=op.f("uq_subscriptions_telegram_id_channel_name"),
        ),
        comment="Subscription registry. One row per (subscriber, channel) pair.",
        sqlite_autoincrement=True,
    )
    op.create_index(
        op.f("ix_subscriptions_channel_name"),
        "subscriptions",
        ["channel_name"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index(op.f("ix_subscriptions_channel_name"), table_name="subscriptions")
    op.drop_table("subscriptions")
