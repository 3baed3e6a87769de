"""SUBRELAY fan-out commands.

``publish`` notifies every subscriber of one channel; ``broadcast`` notifies
every subscriber of any channel. Deliveries are written to **stdout** as JSON
lines (``{"subscriber_id": ..., "message": ...}``) for a transport process to
pick up. The delivery report goes to stderr.
"""

from __future__ import annotations

import sys

import click

from subrelay.bootstrap import stream_notifier
from subrelay.service_layer import commands

from .helpers import success, warn
from .helpers.app import cli_errors, open_app

BROADCAST_WARNING = "This will send the message to every subscriber of every channel."


def _report(sent: int, errors: int, audience: str) -> None:
    line = f"Delivered to {sent} {audience}"
    if errors:
        warn(f"{line}; {errors} failed.")
    else:
        success(f"{line}.")


@click.command()
@click.argument("channel_name", metavar="CHANNEL")
@click.argument("message")
def publish(channel_name: str, message: str) -> None:
    """Send MESSAGE to every subscriber of CHANNEL."""
    with cli_errors():
        app = open_app(notifier=stream_notifier(sys.stdout))
        report = app.message_bus.handle(
            commands.PublishToChannel(channel_name=channel_name, message=message)
        )
    _report(report.sent, report.errors, f"subscriber(s) of '{channel_name}'")


@click.command()
@click.argument("message")
@click.option("--force", is_flag=True, help="Broadcast without confirmation.")
def broadcast(message: str, force: bool) -> None:
    """Send MESSAGE to every subscriber of any channel."""
    if not force:
        warn(BROADCAST_WARNING)
        click.confirm("Are you sure you want to proceed?", abort=True, err=True)

    with cli_errors():
        app = open_app(notifier=stream_notifier(sys.stdout))
        report = app.message_bus.handle(commands.Broadcast(message=message))
    _report(report.sent, report.errors, f"of {report.total_subscribers} subscriber(s)")
