"""SUBRELAY DB CLI: forward-only Alembic wrappers.

The subscription registry only ever moves forward, so ``downgrade`` and
``stamp`` are not exposed.

Behavior
- Alembic is configured programmatically. Human-oriented notices go to
  **stderr** and Alembic output to **stdout**.
- ``upgrade`` asks for confirmation unless ``--force`` or ``--sql`` is given.

Requirements
- ``SUBRELAY_DB_URL`` must be set for every command that touches the database
  (``heads`` and plain ``history`` only read the packaged migration scripts).

Failure modes
- Missing/invalid ``SUBRELAY_DB_URL`` or unreachable DB → ``ClickException`` with guidance.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

from subrelay import config
from subrelay.adapters.db.engine import make_engine

from .helpers import error, resolve_db_url, sanitize_url, success, warn

if TYPE_CHECKING:
    from alembic.config import Config
    from sqlalchemy.engine import Engine

UPGRADE_SCHEMA_WARNING = (
    "This will upgrade the subscription registry schema to the latest version.\n"
    "Please ensure you have a backup before proceeding."
)

UPGRADE_SCHEMA_INSTRUCTIONS = "Run 'subrelay db upgrade' to update the schema."


class MigrationStatus(Enum):
    """Where the database schema stands relative to the packaged head."""

    UP_TO_DATE = "up to date"
    OUT_OF_DATE = "out of date"
    UNINITIALIZED = "uninitialized"


def _verbose_option(fn):
    return click.option(
        "--verbose",
        "-v",
        "verbose",
        is_flag=True,
        help="Show alembic's more verbose output.",
    )(fn)


@click.group(cls=clickx.ExtraGroup)
def db() -> None:
    """Database management commands."""


@db.command()
@_verbose_option
def current(verbose: bool) -> None:
    """Show current DB revision."""
    cfg = config.build_alembic_config(db_url=resolve_db_url(), stdout=sys.stdout)
    command.current(cfg, verbose=verbose)


@db.command()
@_verbose_option
def heads(verbose: bool) -> None:
    """Show available head revisions."""
    cfg = config.build_alembic_config(stdout=sys.stdout)
    command.heads(cfg, verbose=verbose)


@db.command()
@_verbose_option
@click.option(
    "--indicate-current",
    "-i",
    "indicate_current",
    is_flag=True,
    help="Indicate the current revision.",
)
def history(verbose: bool, indicate_current: bool) -> None:
    """Show revision history."""
    db_url = resolve_db_url() if indicate_current else None
    cfg = config.build_alembic_config(db_url=db_url, stdout=sys.stdout)
    command.history(cfg, verbose=verbose, indicate_current=indicate_current)


@db.command()
@click.option("--sql", is_flag=True, help="Generate SQL without executing.")
@click.option("--force", is_flag=True, help="Upgrade without confirmation.")
def upgrade(sql: bool, force: bool) -> None:
    """Upgrade the database to the head revision."""
    url = resolve_db_url()
    cfg = config.build_alembic_config(db_url=url, stdout=sys.stdout)
    if not force and not sql:
        warn(UPGRADE_SCHEMA_WARNING)
        click.secho(f"db: {click.style(sanitize_url(url), underline=True)}", err=True)
        click.confirm("Are you sure you want to proceed?", abort=True, err=True)
    command.upgrade(cfg, revision="head", sql=sql)
    success("Upgrade complete!")


def _current_revision(engine: Engine) -> str | None:
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def _head_revision(cfg: Config) -> str | None:
    heads_ = ScriptDirectory.from_config(cfg).get_heads()
    return heads_[0] if heads_ else None


def _migration_status(rev: str | None, head: str | None) -> MigrationStatus:
    if rev is None:
        return MigrationStatus.UNINITIALIZED
    if rev == head:
        return MigrationStatus.UP_TO_DATE
    return MigrationStatus.OUT_OF_DATE


@db.command()
def status() -> None:
    """Show database connection and schema status."""
    try:
        url = resolve_db_url()
    except click.ClickException as e:
        error("Cannot connect to database")
        click.echo(e.format_message())
        sys.exit(1)

    engine = make_engine(url)
    try:
        success("Database reachable")
        click.echo(f"Backend : {engine.dialect.name}")
        click.echo(f"URL     : {sanitize_url(url)}")
        rev = _current_revision(engine)
    finally:
        engine.dispose()

    migration_status = _migration_status(rev, _head_revision(config.build_alembic_config()))
    click.echo(
        f"Schema  : {rev} ({migration_status.value})"
        if rev is not None
        else f"Schema  : {migration_status.value}"
    )
    if migration_status is not MigrationStatus.UP_TO_DATE:
        warn(UPGRADE_SCHEMA_INSTRUCTIONS)
