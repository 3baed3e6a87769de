"""SUBRELAY subscription commands.

Manage the registry by hand: subscribe or unsubscribe a subscriber, list what
a subscriber follows or who follows a channel, and dump the whole registry.

Listings print one item per line on **stdout**; confirmations go to stderr.
"""

from __future__ import annotations

import json
import sys

import click
import click_extra as clickx

from subrelay.service_layer import commands, views

from .helpers import success, warn
from .helpers.app import cli_errors, open_app

SUBSCRIBER = click.argument("subscriber_id", metavar="SUBSCRIBER", type=int)
CHANNEL = click.argument("channel_name", metavar="CHANNEL")


@click.group(cls=clickx.ExtraGroup)
def subs() -> None:
    """Manage channel subscriptions."""


@subs.command()
@SUBSCRIBER
@CHANNEL
def subscribe(subscriber_id: int, channel_name: str) -> None:
    """Subscribe SUBSCRIBER to CHANNEL."""
    with cli_errors():
        app = open_app()
        subscription = app.message_bus.handle(
            commands.Subscribe(subscriber_id=subscriber_id, channel_name=channel_name)
        )
    success(
        f"Subscribed {subscriber_id} to '{channel_name}' "
        f"(subscription #{subscription.id})."
    )


@subs.command()
@SUBSCRIBER
@CHANNEL
def unsubscribe(subscriber_id: int, channel_name: str) -> None:
    """Unsubscribe SUBSCRIBER from CHANNEL."""
    with cli_errors():
        app = open_app()
        app.message_bus.handle(
            commands.Unsubscribe(subscriber_id=subscriber_id, channel_name=channel_name)
        )
    success(f"Unsubscribed {subscriber_id} from '{channel_name}'.")


@subs.command(name="list")
@SUBSCRIBER
def list_(subscriber_id: int) -> None:
    """List the channels SUBSCRIBER follows, oldest first."""
    with cli_errors():
        channels = views.list_by_user(subscriber_id, open_app().uow)
    if not channels:
        warn(f"Subscriber {subscriber_id} has no subscriptions.")
    for channel_name in channels:
        click.echo(channel_name)


@subs.command()
@CHANNEL
def subscribers(channel_name: str) -> None:
    """List the subscribers of CHANNEL, oldest first."""
    with cli_errors():
        app = open_app()
        subscriber_ids = views.list_subscribers(channel_name, app.uow, app.cache)
    if not subscriber_ids:
        warn(f"Channel '{channel_name}' has no subscribers.")
    for subscriber_id in subscriber_ids:
        click.echo(subscriber_id)


@subs.command()
@SUBSCRIBER
@CHANNEL
def check(subscriber_id: int, channel_name: str) -> None:
    """Exit 0 if SUBSCRIBER follows CHANNEL, 1 otherwise."""
    with cli_errors():
        subscribed = views.exists(subscriber_id, channel_name, open_app().uow)
    click.echo("subscribed" if subscribed else "not subscribed")
    if not subscribed:
        sys.exit(1)


@subs.command()
@click.option("--json", "as_json", is_flag=True, help="Emit a JSON document.")
def dump(as_json: bool) -> None:
    """Print every subscription, ordered by channel then subscriber."""
    with cli_errors():
        records = views.list_all(open_app().uow)

    if as_json:
        document = {
            "subscriptions": [
                {
                    "id": record.id,
                    "subscriber_id": record.subscriber_id,
                    "channel_name": record.channel_name,
                    "created_at": record.created_at.isoformat(),
                }
                for record in records
            ],
            "total": len(records),
        }
        click.echo(json.dumps(document, indent=2))
        return

    for record in records:
        click.echo(
            f"{record.id}\t{record.subscriber_id}\t{record.channel_name}\t"
            f"{record.created_at.isoformat()}"
        )
    success(f"{len(records)} subscription(s).")
