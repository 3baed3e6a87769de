"""Message bus implementation for handling commands."""

import logging
from collections.abc import Callable
from typing import Any

from subrelay.domain.errors import DomainError
from subrelay.interfaces.subscription_store import AlreadySubscribed, NotSubscribed
from subrelay.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods

#: Outcomes callers are expected to surface as messages, not crashes.
EXPECTED_ERRORS = (DomainError, AlreadySubscribed, NotSubscribed)


class NoHandlerForCommand(LookupError):
    """Exception raised when no handler is found for a command."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


class MessageBus:
    """A simple, synchronous message bus for handling commands.

    Routes each command to its handler and returns whatever the handler
    returns. Expected rejections (invalid input, already/not subscribed) are
    logged at INFO and re-raised; anything else is logged with a traceback and
    re-raised.

    Args:
        uow: The unit of work injected into the handlers, also exposed here so
            entrypoints can run read-side views against it.
        command_handlers: A mapping of command types to their handlers.
            Handlers take a single command argument; other dependencies must
            already be bound (see ``bootstrap.inject_dependencies``).
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        command_handlers: dict[type[Command], Callable[..., Any]],
    ) -> None:
        self.uow = uow
        self._command_handlers = command_handlers

    def handle(self, cmd: Command) -> Any:
        """Dispatch a command to its handler.

        Args:
            cmd: The command to handle.

        Returns:
            The handler's result.

        Raises:
            NoHandlerForCommand: If no handler is registered for the command type.
            Exception: Whatever the handler raises.
        """
        if not (handler := self._command_handlers.get(type(cmd))):
            logger.error("No handler found for command %s", type(cmd).__name__)
            raise NoHandlerForCommand(cmd)

        handler_name = self._get_handler_name(handler)
        logger.debug("Handling command %s with handler %s", cmd, handler_name)
        try:
            return handler(cmd)
        except EXPECTED_ERRORS as e:
            logger.info("Command %s rejected: %s", type(cmd).__name__, e)
            raise
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "Exception handling command %s with handler %s", cmd, handler_name
            )
            raise

    @staticmethod
    def _get_handler_name(fn: Callable[..., Any]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
