"""Unit tests for :mod:`subrelay.entrypoints.cli.helpers.messages`.

Covers glyph selection against the stderr encoding and the styling/stream of
``warn``/``success``/``error``.
"""

import io
import sys

import click
import pytest

from subrelay.entrypoints.cli.helpers.messages import error, glyph, success, warn

SET_YELLOW = "\x1b[33m"
SET_GREEN = "\x1b[32m"
SET_RED = "\x1b[31m"
SET_BOLD = "\x1b[1m"
RESET = "\x1b[0m"


class FakeTTY(io.StringIO):
    """A text stream that claims to be a TTY with a chosen encoding."""

    def __init__(self, encoding: str):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self) -> str:
        """Declared character encoding (e.g., ``'ascii'`` or ``'utf-8'``)."""
        return self._encoding

    def isatty(self) -> bool:
        """Report a TTY so Click keeps ANSI styling."""
        return True


@pytest.mark.parametrize(
    ("encoding", "expected"),
    [
        ("ascii", {"warn": "[!]", "success": "[OK]", "error": "[X]"}),
        ("utf-8", {"warn": "⚠️", "success": "✅", "error": "❌"}),
    ],
)
def test_glyphs_respect_stream_encoding(monkeypatch, encoding, expected):
    """Emoji are used only when stderr can encode them."""
    stream = FakeTTY(encoding)
    monkeypatch.setattr(click, "get_text_stream", lambda name: stream)

    assert {kind: glyph(kind) for kind in expected} == expected


def test_glyph_requeries_stream_each_call(monkeypatch):
    """The encoding is checked on every call, never cached."""
    encodings = iter(["ascii", "utf-8"])
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY(next(encodings)))

    assert glyph("success") == "[OK]"
    assert glyph("success") == "✅"


@pytest.mark.parametrize(
    ("encoding", "marker", "color_code", "func"),
    [
        ("ascii", "[!]", SET_YELLOW, warn),
        ("utf-8", "⚠️", SET_YELLOW, warn),
        ("ascii", "[OK]", SET_GREEN, success),
        ("utf-8", "✅", SET_GREEN, success),
        ("ascii", "[X]", SET_RED, error),
        ("utf-8", "❌", SET_RED, error),
    ],
)
def test_messages_emit_styled_stderr(monkeypatch, encoding, marker, color_code, func):
    """warn/success/error write bold, colored lines with the right marker."""
    stream = FakeTTY(encoding)
    monkeypatch.setattr(click, "get_text_stream", lambda name: stream)
    monkeypatch.setattr(sys, "stderr", stream, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)

    func("danger!")

    out = stream.getvalue()
    assert f"{marker}  danger!" in out
    assert SET_BOLD in out
    assert color_code in out
    assert RESET in out


@pytest.mark.parametrize("func", [warn, success, error])
def test_messages_leave_stdout_alone(capsys, func):
    """Status lines go to stderr so stdout stays machine-readable."""
    func("status")
    captured = capsys.readouterr()
    assert "status" in captured.err
    assert captured.out == ""
