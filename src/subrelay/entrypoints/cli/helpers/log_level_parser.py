"""Parse ``NAME=LEVEL`` logger overrides for the ``-L/--logger-level`` option.

Values may be repeated (``-L sqlalchemy=INFO -L alembic=DEBUG``) or packed into
one comma/space separated string, which is how ``SUBRELAY_LOGGER_LEVELS``
arrives from the environment.
"""

import logging
import re

import click

# Chatty libraries start quiet unless the user asks otherwise.
DEFAULT_LIB_LEVELS = {"sqlalchemy": logging.WARNING, "alembic": logging.WARNING}

_SEPARATORS = re.compile(r"[,\s]+")


def _split_items(value: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Flatten *value* into individual ``NAME=LEVEL`` strings."""
    if value is None:
        return []
    chunks = [value] if isinstance(value, str) else list(value)
    return [item for chunk in chunks for item in _SEPARATORS.split(chunk) if item]


def _to_level(level_str: str) -> int:
    level = logging.getLevelName(level_str.strip().upper())
    if not isinstance(level, int):
        raise click.BadParameter(f"Invalid log level: {level_str}")
    return level


def parse_log_level(
    ctx: click.Context | None,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...] | None,
) -> dict[str, int]:
    """Click callback mapping logger names to numeric levels.

    The result always starts from ``DEFAULT_LIB_LEVELS``; later items win.

    Raises:
        click.BadParameter: If an item is not ``NAME=LEVEL`` or LEVEL is unknown.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in _split_items(value):
        name, sep, level_str = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        levels[name.strip()] = _to_level(level_str)
    return levels
