"""Logging helpers used by the SUBRELAY CLI and application.

Console output goes through Rich on stderr. An optional in-memory "flight
recorder" buffers DEBUG-level records and writes them to disk when something
goes wrong (or on exit, if asked). Third-party records get a short bracketed
prefix so they stand out from SUBRELAY's own messages.

The subscription store adapters never log; logging happens in the service
layer and the entrypoints.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "subrelay"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


class ThirdPartyPrefixFilter(logging.Filter):
    """Annotate third-party log records with a short prefix.

    Records from loggers outside the project get ``record.prefix`` set to a
    token like "[sqlalchemy]"; project records get an empty prefix. Never
    drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith(PROJECT_PREFIX):
            record.prefix = f"[{record.name.split('.')[0]}]"
        else:
            record.prefix = ""
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Configure and return a RichHandler for console output.

    Args:
        level: Minimum level for console output (forced to DEBUG in debug mode).
        debug_mode: Show timestamps, logger names and source paths.
        color: Enable color output (mirrors click-extra's ``--color/--no-color``).

    Returns:
        RichHandler: Handler writing to stderr.
    """
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    fmt = (
        "%(asctime)s %(name)s: %(message)s"
        if debug_mode
        else "%(prefix)s %(message)s"
    )
    handler.setFormatter(logging.Formatter(fmt=fmt))

    if not debug_mode:
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Configure an in-memory flight recorder backed by a file.

    Up to ``capacity`` records are buffered. The buffer is written to ``path``
    when a record at ``flush_level`` or above arrives, when the buffer fills,
    or on close if ``flush_on_close`` is set.

    Args:
        path: Destination file for flushed records.
        capacity: Number of records to buffer.
        flush_level: Level that triggers a flush.
        flush_on_close: Flush the buffer when the handler is closed.

    Returns:
        MemoryHandler: A memory-backed handler with a FileHandler target.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )

    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def configure_logging(  # pylint: disable=too-many-arguments
    *,
    level: int,
    debug_mode: bool,
    color: bool,
    log_path: Path | None,
    flight_capacity: int,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> list[logging.Handler]:
    """Install SUBRELAY's handlers on the root logger.

    The root logger is set to DEBUG so every handler sees every record and
    filters on its own level. Per-logger overrides change the named logger's
    own level and so apply to the console and the flight recorder alike.

    Args:
        level: Console level.
        debug_mode: Developer formatting for the console.
        color: Allow colored console output.
        log_path: Flight-recorder file, or ``None`` to disable the recorder.
        flight_capacity: Flight-recorder buffer size.
        force_flush: Dump the flight recorder on clean exit too.
        logger_levels: Per-logger minimum levels.

    Returns:
        The handlers attached to the root logger.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(level=level, debug_mode=debug_mode, color=color)
    ]
    if log_path is not None:
        handlers.append(
            config_flight_recorder(
                path=log_path, capacity=flight_capacity, flush_on_close=force_flush
            )
        )

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    return handlers


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_capacity: int | None,
    force_flush_fr: bool,
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line summary at INFO and detailed diagnostics at DEBUG.

    Args:
        logger: Logger used to emit startup messages.
        app_version: Application version string.
        level: Effective console level.
        handlers: Handlers attached to the root logger.
        log_path: Flight-recorder file, or ``None`` when the recorder is off.
        flight_capacity: Flight-recorder capacity, or ``None``.
        force_flush_fr: Whether the recorder flushes on close.
        logger_levels: Per-logger overrides in effect.
    """
    flight_recorder = log_path is not None
    logger.info(
        "SUBRELAY %s (console=%s, flight-recorder=%s)",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Alembic: %s", alembic.__version__)
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            log_path,
            flight_capacity,
            force_flush_fr,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
