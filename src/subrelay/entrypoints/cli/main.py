"""SUBRELAY CLI entry point.

Defines the top-level ``subrelay`` command (via Click-Extra), configures
logging for every invocation and registers the subcommands.

Command groups
- ``subrelay db``: forward-only database management (upgrade/current/heads/history/status).
- ``subrelay subs``: manage and inspect subscriptions.
- ``subrelay publish`` / ``subrelay broadcast``: fan a message out to subscribers.

Examples
    $ subrelay --version
    $ subrelay db upgrade
    $ subrelay subs subscribe 42 news
    $ subrelay publish news "Fresh post on #news"
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from subrelay import __version__, config
from subrelay.logging import configure_logging, log_startup

from .db import db as db_group
from .fanout import broadcast as broadcast_command
from .fanout import publish as publish_command
from .helpers.log_level_parser import parse_log_level
from .subscriptions import subs as subs_group

logger = logging.getLogger(__name__)


HELP = """SUBRELAY command-line interface.

    SUBRELAY keeps the registry of which subscribers follow which channels and
    fans channel messages out to them. Use it to migrate the registry database,
    manage subscriptions by hand, and push messages through a notifier.
    """


def _console_level(verbose_count: int, quiet_count: int) -> int:
    """WARNING, moved one level per -v (down) or -q (up), clamped to DEBUG..CRITICAL."""
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (developer formatting and DEBUG console output).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Flight recorder file.",
    default=config.default_log_path,
    envvar=config.LOG_PATH_ENV_VAR,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=config.DEFAULT_FLIGHT_RECORDER_CAPACITY,
    hidden=True,
    envvar=config.FLIGHT_RECORDER_CAPACITY_ENV_VAR,
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last N log records (SUBRELAY_FLIGHT_RECORDER_CAPACITY) at DEBUG "
        "granularity, independent of -v/-q, and write them to --log-path when a "
        "WARNING or ERROR occurs, or on exit with --force-flush."
    ),
    default=True,
    envvar=config.FLIGHT_RECORDER_ENV_VAR,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Write the flight recorder buffer to --log-path on exit even without warnings.",
    envvar=config.FORCE_FLUSH_ENV_VAR,
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    envvar=config.LOGGER_LEVELS_ENV_VAR,
    help=(
        "Set the minimum level of a logger (NAME=LEVEL), for both the console "
        "and the flight recorder. Repeatable (e.g. -L sqlalchemy=INFO "
        "-L subrelay.service_layer=DEBUG)."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def subrelay(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """SUBRELAY command-line interface."""
    level = _console_level(verbose_count, quiet_count)
    recorder_path = log_path if flight_recorder else None

    handlers = configure_logging(
        level=level,
        debug_mode=debug,
        color=ctx.color is not False,  # None or True => allow color
        log_path=recorder_path,
        flight_capacity=flight_recorder_capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    log_startup(
        logger,
        app_version=__version__,
        level=logging.DEBUG if debug else level,
        handlers=handlers,
        log_path=recorder_path,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    # runs after the subcommand returns
    ctx.call_on_close(logging.shutdown)


subrelay.add_command(db_group)
subrelay.add_command(subs_group)
subrelay.add_command(publish_command)
subrelay.add_command(broadcast_command)
