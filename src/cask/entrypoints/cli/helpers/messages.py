"""Terminal message helpers for the CASK CLI.

Every helper writes one bold, colored line to stderr so stdout stays
machine-readable. Glyphs fall back to ASCII on terminals that cannot encode
them.
"""

import click

WARN_GLYPHS = ("⚠️", "[!]")  # pragma: no mutate
SUCCESS_GLYPHS = ("✅", "[OK]")  # pragma: no mutate
ERROR_GLYPHS = ("❌", "[X]")  # pragma: no mutate


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(choices: tuple[str, str]) -> str:
    """Return the emoji of ``(emoji, fallback)`` if stderr can show it."""
    emoji, fallback = choices
    return emoji if _supports_character(emoji) else fallback


def warn(msg: str) -> None:
    """Emit a yellow warning line, e.g. ``⚠️  This will modify your database.``"""
    click.secho(f"{glyph(WARN_GLYPHS)}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green success line, e.g. ``✅  Badge created.``"""
    click.secho(f"{glyph(SUCCESS_GLYPHS)}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red error line, e.g. ``❌  Cannot connect to database.``"""
    click.secho(f"{glyph(ERROR_GLYPHS)}  {msg}", fg="red", bold=True, err=True)
