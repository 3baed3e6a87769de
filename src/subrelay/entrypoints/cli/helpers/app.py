"""Wiring and error translation shared by the ``subs``, ``publish`` and
``broadcast`` commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import click

from subrelay.bootstrap import AppContainer, bootstrap
from subrelay.domain import DomainError
from subrelay.interfaces.subscription_store import (
    StorageUnavailable,
    SubscriptionStoreError,
)
from subrelay.service_layer.messagebus import NoHandlerForCommand

from .db_url import resolve_db_url

if TYPE_CHECKING:
    from subrelay.interfaces.notifier import Notifier

STORAGE_UNAVAILABLE_HINT = (
    "If the schema has not been created yet, run 'subrelay db upgrade'."
)


def open_app(notifier: Notifier | None = None) -> AppContainer:
    """Wire the application against ``SUBRELAY_DB_URL``."""
    return bootstrap(db_url=resolve_db_url(), notifier=notifier)


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn expected application errors into ``click.ClickException`` (exit 1)."""
    try:
        yield
    except StorageUnavailable as e:
        raise click.ClickException(
            f"Storage unavailable: {e}\n{STORAGE_UNAVAILABLE_HINT}"
        ) from e
    except (DomainError, SubscriptionStoreError, NoHandlerForCommand) as e:
        raise click.ClickException(str(e)) from e
