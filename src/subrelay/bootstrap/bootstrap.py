"""Bootstrap the message bus with handlers, unit of work and notifier."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TextIO

from subrelay import config
from subrelay.adapters.db.engine import make_engine
from subrelay.adapters.notifiers import StreamNotifier
from subrelay.adapters.unit_of_work import SqlAlchemyUnitOfWork
from subrelay.service_layer.cache import SubscriberCache
from subrelay.service_layer.handlers import COMMAND_HANDLERS
from subrelay.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from subrelay.interfaces.notifier import Notifier
    from subrelay.interfaces.unit_of_work import AbstractUnitOfWork
    from subrelay.service_layer.commands import Command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """A class to hold the wired application services."""

    message_bus: MessageBus
    uow: AbstractUnitOfWork
    cache: SubscriberCache


def build_uow(url: str) -> AbstractUnitOfWork:
    """Build a unit of work backed by the database at *url*."""
    return SqlAlchemyUnitOfWork(make_engine(url))


def stream_notifier(stream: TextIO) -> Notifier:
    """Build a notifier that writes deliveries as JSON lines to *stream*."""
    return StreamNotifier(stream)


def build_message_bus(
    uow: AbstractUnitOfWork,
    command_handlers: Mapping[type[Command], Callable[..., Any]],
    *,
    cache: SubscriberCache | None = None,
    notifier: Notifier | None = None,
) -> MessageBus:
    """Build a message bus with injected dependencies.

    Handlers receive only the dependencies their signature names. A handler
    whose required dependencies are not all available is left unregistered,
    so dispatching its command raises ``NoHandlerForCommand``.
    """
    dependencies: dict[str, object] = {"uow": uow}
    if cache is not None:
        dependencies["cache"] = cache
    if notifier is not None:
        dependencies["notifier"] = notifier

    injected_command_handlers = {}
    for command_type, handler in command_handlers.items():
        if missing := missing_dependencies(handler, dependencies):
            logger.debug(
                "Not registering %s for %s: missing %s",
                handler.__name__,
                command_type.__name__,
                ", ".join(missing),
            )
            continue
        injected_command_handlers[command_type] = inject_dependencies(
            handler, dependencies
        )

    return MessageBus(uow, command_handlers=injected_command_handlers)


def bootstrap(
    db_url: str | None = None,
    uow: AbstractUnitOfWork | None = None,
    notifier: Notifier | None = None,
) -> AppContainer:
    """Wire the application.

    Args:
        db_url: Database URL; defaults to ``SUBRELAY_DB_URL``. Ignored if
            ``uow`` is given.
        uow: Unit of work to use instead of building one from the URL.
        notifier: Transport for the fan-out commands. Without one, publish and
            broadcast are not registered.

    Raises:
        DatabaseUrlNotSetError: If neither ``uow`` nor ``db_url`` is given
            and ``SUBRELAY_DB_URL`` is not set.
    """
    if uow is None:
        uow = build_uow(db_url or config.get_db_url())
    cache = SubscriberCache()
    message_bus = build_message_bus(
        uow, COMMAND_HANDLERS, cache=cache, notifier=notifier
    )
    return AppContainer(message_bus=message_bus, uow=uow, cache=cache)


def missing_dependencies(
    handler: Callable[..., Any], dependencies: Mapping[str, object]
) -> list[str]:
    """Names of required handler parameters (after the command) with no dependency."""
    params = list(inspect.signature(handler).parameters.values())[1:]
    return [
        param.name
        for param in params
        if param.default is inspect.Parameter.empty and param.name not in dependencies
    ]


def inject_dependencies(
    handler: Callable[..., Any], dependencies: Mapping[str, object]
) -> Callable[..., Any]:
    """Bind the dependencies a handler asks for by parameter name."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return functools.partial(handler, **deps)
