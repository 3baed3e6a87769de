"""Functional tests for ``subrelay subs``.

An operator manages the registry by hand: subscribing and unsubscribing,
listing both directions of the relationship, checking a single pair from a
script, and dumping everything for inspection. Listings are asserted on
``result.stdout`` only, since status lines go to stderr.
"""

import json
from datetime import datetime

import pytest

from subrelay.entrypoints.cli.helpers.app import STORAGE_UNAVAILABLE_HINT
from subrelay.entrypoints.cli.main import subrelay as subrelay_cli
from tests.helpers.cli import make_runner

# pylint: disable=magic-value-comparison


def _subscribe(runner, subscriber_id: int, channel_name: str):
    return runner.invoke(
        subrelay_cli, ["subs", "subscribe", str(subscriber_id), channel_name]
    )


def test_subscribe_reports_the_new_subscription(runner):
    result = _subscribe(runner, 42, "news")
    assert result.exit_code == 0, result.output
    assert "Subscribed 42 to 'news' (subscription #1)." in result.output
    assert result.stdout == ""


def test_subscribe_twice_is_rejected(runner):
    assert _subscribe(runner, 42, "news").exit_code == 0

    result = _subscribe(runner, 42, "news")
    assert result.exit_code == 1
    assert "already subscribed" in result.output.lower()


@pytest.mark.parametrize("channel_name", ["", "a b"])
def test_subscribe_invalid_channel_name(runner, channel_name):
    result = _subscribe(runner, 42, channel_name)
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert runner.invoke(subrelay_cli, ["subs", "dump", "--json"]).stdout.count(
        '"id"'
    ) == 0


def test_unsubscribe_round_trip(runner):
    _subscribe(runner, 42, "news")

    result = runner.invoke(subrelay_cli, ["subs", "unsubscribe", "42", "news"])
    assert result.exit_code == 0, result.output
    assert "Unsubscribed 42 from 'news'." in result.output

    result = runner.invoke(subrelay_cli, ["subs", "unsubscribe", "42", "news"])
    assert result.exit_code == 1
    assert "not subscribed" in result.output.lower()


def test_list_channels_in_subscription_order(runner):
    for channel_name in ("sport", "news", "weather"):
        _subscribe(runner, 7, channel_name)

    result = runner.invoke(subrelay_cli, ["subs", "list", "7"])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == ["sport", "news", "weather"]


def test_list_for_unknown_subscriber_warns(runner):
    result = runner.invoke(subrelay_cli, ["subs", "list", "99"])
    assert result.exit_code == 0, result.output
    assert result.stdout == ""
    assert "Subscriber 99 has no subscriptions." in result.output


def test_subscribers_after_churn(runner):
    """1, 2 and 3 subscribe; 2 leaves; 1 and 3 remain in order."""
    for subscriber_id in (1, 2, 3):
        _subscribe(runner, subscriber_id, "news")
    runner.invoke(subrelay_cli, ["subs", "unsubscribe", "2", "news"])

    result = runner.invoke(subrelay_cli, ["subs", "subscribers", "news"])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == ["1", "3"]


def test_subscribers_of_empty_channel_warns(runner):
    result = runner.invoke(subrelay_cli, ["subs", "subscribers", "quiet"])
    assert result.exit_code == 0, result.output
    assert "Channel 'quiet' has no subscribers." in result.output


def test_check_exit_codes(runner):
    _subscribe(runner, 42, "news")

    result = runner.invoke(subrelay_cli, ["subs", "check", "42", "news"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "subscribed"

    result = runner.invoke(subrelay_cli, ["subs", "check", "42", "sport"])
    assert result.exit_code == 1
    assert result.stdout.strip() == "not subscribed"


def test_channel_names_are_case_sensitive(runner):
    _subscribe(runner, 42, "News")
    result = runner.invoke(subrelay_cli, ["subs", "check", "42", "news"])
    assert result.exit_code == 1


def test_dump_json(runner):
    _subscribe(runner, 2, "sport")
    _subscribe(runner, 1, "sport")
    _subscribe(runner, 3, "news")

    result = runner.invoke(subrelay_cli, ["subs", "dump", "--json"])
    assert result.exit_code == 0, result.output

    document = json.loads(result.stdout)
    assert document["total"] == 3
    pairs = [(s["channel_name"], s["subscriber_id"]) for s in document["subscriptions"]]
    assert pairs == [("news", 3), ("sport", 1), ("sport", 2)]
    for record in document["subscriptions"]:
        assert datetime.fromisoformat(record["created_at"]).utcoffset().total_seconds() == 0


def test_dump_plain(runner):
    _subscribe(runner, 42, "news")

    result = runner.invoke(subrelay_cli, ["subs", "dump"])
    assert result.exit_code == 0, result.output
    (line,) = result.stdout.splitlines()
    assert line.split("\t")[:3] == ["1", "42", "news"]
    assert "1 subscription(s)." in result.output


def test_unmigrated_database_suggests_upgrade(sqlite_url):
    result = make_runner(sqlite_url).invoke(subrelay_cli, ["subs", "list", "42"])
    assert result.exit_code == 1
    assert "Storage unavailable" in result.output
    assert STORAGE_UNAVAILABLE_HINT in result.output


def test_non_integer_subscriber_is_a_usage_error(runner):
    result = runner.invoke(subrelay_cli, ["subs", "list", "alice"])
    assert result.exit_code == 2
    assert "is not a valid integer" in result.output


def test_subscriber_id_beyond_64_bits(runner):
    """Oversized ids are refused on write and simply unknown on read."""
    too_big = str(2**63)

    result = runner.invoke(subrelay_cli, ["subs", "subscribe", too_big, "news"])
    assert result.exit_code == 1
    assert "Invalid subscriber id" in result.output

    result = runner.invoke(subrelay_cli, ["subs", "list", too_big])
    assert result.exit_code == 0, result.output
    assert f"Subscriber {too_big} has no subscriptions." in result.output

    result = runner.invoke(subrelay_cli, ["subs", "check", too_big, "news"])
    assert result.exit_code == 1
    assert result.stdout.strip() == "not subscribed"
