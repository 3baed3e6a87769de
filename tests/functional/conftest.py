"""Fixtures shared by the SUBRELAY functional CLI tests."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from tests.helpers.cli import make_runner


@pytest.fixture
def runner(sqlite_migrated_url: str) -> CliRunner:
    """Runner against a migrated, empty SQLite registry."""
    return make_runner(sqlite_migrated_url)
