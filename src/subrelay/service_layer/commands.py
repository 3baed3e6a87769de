"""Module defining Commands."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


@dataclass(frozen=True)
class Subscribe(Command):
    """Command to start following a channel."""

    subscriber_id: int
    channel_name: str


@dataclass(frozen=True)
class Unsubscribe(Command):
    """Command to stop following a channel."""

    subscriber_id: int
    channel_name: str


@dataclass(frozen=True)
class PublishToChannel(Command):
    """Command to notify every subscriber of a channel."""

    channel_name: str
    message: str


@dataclass(frozen=True)
class Broadcast(Command):
    """Command to notify every subscriber of any channel, once each."""

    message: str
