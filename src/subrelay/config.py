"""Runtime settings for SUBRELAY.

Every knob the registry reads from the environment is named here, so the CLI,
the bootstrap and the Alembic environment agree on one spelling:

- ``SUBRELAY_DB_URL``: the subscription registry database (SQLite or Postgres).
- ``SUBRELAY_LOG_PATH`` and the ``SUBRELAY_FLIGHT_RECORDER*`` variables: where
  and how the CLI keeps its crash log.
- ``SUBRELAY_LOGGER_LEVELS``: per-logger level overrides.

It also builds the Alembic configuration for the packaged registry migrations.
"""

import os
import sys
from importlib.resources import files
from pathlib import Path
from typing import TextIO

from alembic.config import Config
from platformdirs import user_log_dir

APP_NAME = "subrelay"  # pragma: no mutate

DB_URL_ENV_VAR = "SUBRELAY_DB_URL"  # pragma: no mutate
LOG_PATH_ENV_VAR = "SUBRELAY_LOG_PATH"  # pragma: no mutate
FLIGHT_RECORDER_ENV_VAR = "SUBRELAY_FLIGHT_RECORDER"  # pragma: no mutate
FLIGHT_RECORDER_CAPACITY_ENV_VAR = "SUBRELAY_FLIGHT_RECORDER_CAPACITY"  # pragma: no mutate
FORCE_FLUSH_ENV_VAR = "SUBRELAY_FORCE_FLUSH_FLIGHT_RECORDER"  # pragma: no mutate
LOGGER_LEVELS_ENV_VAR = "SUBRELAY_LOGGER_LEVELS"  # pragma: no mutate

DEFAULT_FLIGHT_RECORDER_CAPACITY = 2000

ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate
MIGRATIONS_PACKAGE = "subrelay.adapters.db.alembic"  # pragma: no mutate


class DatabaseUrlNotSetError(Exception):
    """No registry database was configured in ``SUBRELAY_DB_URL``."""

    def __init__(self) -> None:
        super().__init__(f"{DB_URL_ENV_VAR} is not set.")


def get_db_url() -> str:
    """Return the registry database URL from ``SUBRELAY_DB_URL``.

    Surrounding whitespace is dropped, and a blank value counts as unset.

    Raises:
        DatabaseUrlNotSetError: If no usable URL is configured.
    """
    if not (url := os.environ.get(DB_URL_ENV_VAR, "").strip()):
        raise DatabaseUrlNotSetError
    return url


def default_log_path() -> Path:
    """Per-user file the flight recorder writes to unless ``--log-path`` is given."""
    return Path(user_log_dir(APP_NAME, appauthor=False, ensure_exists=True)) / "latest.log"


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Alembic ``Config`` for the subscriptions-table migrations.

    Args:
        db_url: Registry database to migrate or inspect. Leave it ``None`` for
            offline commands such as ``heads`` and ``history``.
        stdout: Stream for Alembic's status lines (``db current``/``history``).

    Returns:
        A config whose script location is the migrations package shipped
        inside ``subrelay``.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    cfg.set_main_option(ALEMBIC_SCRIPT_LOCATION_KEY, str(files(MIGRATIONS_PACKAGE)))
    return cfg
