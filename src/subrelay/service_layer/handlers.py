"""Command handlers.

Each handler opens the unit of work, performs one store operation (or one
fan-out pass) and commits. Subscription writes invalidate the fan-out cache
only after the commit, so a reader never caches data older than the write
that invalidated it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from subrelay.domain import ensure_valid_channel_name, ensure_valid_message
from subrelay.interfaces.notifier import NotificationFailed, Notifier
from subrelay.interfaces.subscription_store import Subscription
from subrelay.interfaces.unit_of_work import AbstractUnitOfWork

from . import commands, views
from .cache import SubscriberCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FanoutReport:
    """Outcome of notifying one channel's subscribers."""

    channel_name: str
    sent: int
    errors: int


@dataclass(frozen=True)
class BroadcastReport:
    """Outcome of notifying every subscriber."""

    sent: int
    errors: int
    total_subscribers: int


def subscribe(
    cmd: commands.Subscribe,
    uow: AbstractUnitOfWork,
    cache: SubscriberCache | None = None,
) -> Subscription:
    """Record that a subscriber follows a channel."""
    with uow:
        subscription = uow.subscriptions.subscribe(cmd.subscriber_id, cmd.channel_name)
        uow.commit()

    if cache is not None:
        cache.invalidate(cmd.channel_name)
    logger.info(
        "Subscriber %s subscribed to %r (id=%s)",
        cmd.subscriber_id,
        cmd.channel_name,
        subscription.id,
    )
    return subscription


def unsubscribe(
    cmd: commands.Unsubscribe,
    uow: AbstractUnitOfWork,
    cache: SubscriberCache | None = None,
) -> None:
    """Remove a subscriber from a channel."""
    with uow:
        uow.subscriptions.unsubscribe(cmd.subscriber_id, cmd.channel_name)
        uow.commit()

    if cache is not None:
        cache.invalidate(cmd.channel_name)
    logger.info("Subscriber %s unsubscribed from %r", cmd.subscriber_id, cmd.channel_name)


def publish_to_channel(
    cmd: commands.PublishToChannel,
    uow: AbstractUnitOfWork,
    notifier: Notifier,
    cache: SubscriberCache | None = None,
) -> FanoutReport:
    """Notify every subscriber of a channel.

    Delivery failures are counted and logged; they never stop the fan-out.
    """
    ensure_valid_channel_name(cmd.channel_name)
    ensure_valid_message(cmd.message)

    recipients = views.list_subscribers(cmd.channel_name, uow, cache=cache)
    sent, errors = _deliver(notifier, recipients, cmd.message)

    logger.info(
        "Published to %r: %d sent, %d failed", cmd.channel_name, sent, errors
    )
    return FanoutReport(channel_name=cmd.channel_name, sent=sent, errors=errors)


def broadcast(
    cmd: commands.Broadcast, uow: AbstractUnitOfWork, notifier: Notifier
) -> BroadcastReport:
    """Notify each distinct subscriber once, whatever channels they follow."""
    ensure_valid_message(cmd.message)

    with uow:
        recipients = uow.subscriptions.list_all_subscribers()
    sent, errors = _deliver(notifier, recipients, cmd.message)

    logger.info(
        "Broadcast to %d subscribers: %d sent, %d failed", len(recipients), sent, errors
    )
    return BroadcastReport(sent=sent, errors=errors, total_subscribers=len(recipients))


def _deliver(
    notifier: Notifier, recipients: Iterable[int], message: str
) -> tuple[int, int]:
    sent = errors = 0
    for subscriber_id in recipients:
        try:
            notifier.send(subscriber_id, message)
        except NotificationFailed as e:
            errors += 1
            logger.warning("%s", e)
        else:
            sent += 1
    return sent, errors


COMMAND_HANDLERS: dict[type[commands.Command], Callable[..., object]] = {
    commands.Subscribe: subscribe,
    commands.Unsubscribe: unsubscribe,
    commands.PublishToChannel: publish_to_channel,
    commands.Broadcast: broadcast,
}
