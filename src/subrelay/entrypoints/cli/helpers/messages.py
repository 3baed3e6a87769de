"""Terminal message helpers for the SUBRELAY CLI.

Status lines (warnings, successes, errors) always go to **stderr** so that
stdout stays reserved for data: subscriber ids, channel listings, ``--json``
dumps, and delivered fan-out messages.

Each line starts with an emoji marker, or an ASCII stand-in when the stderr
encoding cannot represent the emoji (e.g. a cp1252 Windows console).
"""

import click

# kind -> (emoji, ascii fallback, colour)
_STYLES = {
    "warn": ("⚠️", "[!]", "yellow"),
    "success": ("✅", "[OK]", "green"),
    "error": ("❌", "[X]", "red"),
}


def _can_encode(character: str) -> bool:
    """Return True if *character* survives encoding on the stderr stream."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "utf-8"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(kind: str) -> str:
    """Return the marker for *kind* ("warn", "success" or "error")."""
    emoji, fallback, _ = _STYLES[kind]
    return emoji if _can_encode(emoji) else fallback


def _emit(kind: str, msg: str) -> None:
    colour = _STYLES[kind][2]
    click.secho(f"{glyph(kind)}  {msg}", fg=colour, bold=True, err=True)


def warn(msg: str) -> None:
    """Emit a yellow warning line, e.g. ``⚠️  This will modify your database.``"""
    _emit("warn", msg)


def success(msg: str) -> None:
    """Emit a green success line, e.g. ``✅  Subscribed 42 to 'news'.``"""
    _emit("success", msg)


def error(msg: str) -> None:
    """Emit a red error line, e.g. ``❌  Cannot connect to database.``"""
    _emit("error", msg)
