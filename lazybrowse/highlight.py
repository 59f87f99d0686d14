"""Syntax highlighting into styled runs.

Wraps Pygments: picks a lexer from a file extension, tokenizes the whole
text once, and splits the token stream into per-line runs of uniform style.
Lexer and style tables are built lazily on first use and never mutated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.style import StyleMeta
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"
_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")
_BOM = "\ufeff"

Color = int | tuple[int, int, int]


@dataclass(frozen=True)
class SpanStyle:
    """Visual attributes of one run.

    ``foreground`` is ``None`` (terminal default), an xterm-256 palette index,
    or an RGB triple.
    """

    foreground: Color | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False


PLAIN_STYLE = SpanStyle()

StyledRun = tuple[str, SpanStyle]
StyledLine = tuple[StyledRun, ...]


def plain_line(text: str, style: SpanStyle = PLAIN_STYLE) -> StyledLine:
    return ((text, style),)


def line_text(line: StyledLine) -> str:
    """Join the text of all runs in ``line``."""
    return "".join(text for text, _style in line)


def split_lines(text: str) -> list[str]:
    """Split at newlines only, keeping terminators."""
    return _LINE_RE.findall(text)


def _lexer_options() -> dict[str, object]:
    return {"stripnl": False, "ensurenl": False}


@lru_cache(maxsize=128)
def lexer_for_extension(extension: str) -> Lexer:
    """Return a lexer for ``extension`` (no leading dot), or plain text."""
    if not extension:
        return TextLexer(**_lexer_options())
    try:
        return get_lexer_for_filename(f"preview.{extension}", **_lexer_options())
    except ClassNotFound:
        return TextLexer(**_lexer_options())


@lru_cache(maxsize=16)
def style_class(name: str) -> StyleMeta:
    """Return the Pygments style class for ``name``, defaulting to monokai."""
    try:
        return get_style_by_name(name)
    except ClassNotFound:
        return get_style_by_name(DEFAULT_STYLE)


def _parse_hex_color(value: str) -> tuple[int, int, int] | None:
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        return None
    try:
        return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
    except ValueError:
        return None


@lru_cache(maxsize=4096)
def _span_style_for_token(style_name: str, token_type) -> SpanStyle:
    info = style_class(style_name).style_for_token(token_type)
    color = info.get("color") or ""
    return SpanStyle(
        foreground=_parse_hex_color(color) if color else None,
        bold=bool(info.get("bold")),
        italic=bool(info.get("italic")),
        underline=bool(info.get("underline")),
    )


def _append_run(runs: list[StyledRun], text: str, style: SpanStyle) -> None:
    if not text:
        return
    if runs and runs[-1][1] == style:
        runs[-1] = (runs[-1][0] + text, style)
        return
    runs.append((text, style))


def highlight_lines(
    source: str,
    extension: str,
    style_name: str = DEFAULT_STYLE,
) -> list[StyledLine]:
    """Highlight ``source`` and return one styled line per source line.

    Lines break at ``\\n`` only, exactly like ``split_lines``. Pygments rewrites
    CRLF and lone CR to LF before tokenizing, so token text is walked against
    ``source`` to put each original terminator back; a lone CR stays inside
    its line. Line terminators stay attached to the last run of their line.
    """
    if not source:
        return []

    lexer = lexer_for_extension(extension)
    lines: list[StyledLine] = []
    runs: list[StyledRun] = []
    pos = 0
    if source.startswith(_BOM):
        # Tokenize without the BOM, which Pygments may strip.
        _append_run(runs, _BOM, PLAIN_STYLE)
        pos = len(_BOM)

    for token_type, value in lexer.get_tokens(source[pos:]):
        style = _span_style_for_token(style_name, token_type)
        for piece in split_lines(value):
            if not piece.endswith("\n"):
                _append_run(runs, source[pos : pos + len(piece)], style)
                pos += len(piece)
                continue

            body_end = pos + len(piece) - 1
            _append_run(runs, source[pos:body_end], style)
            if source.startswith("\r\n", body_end):
                terminator = "\r\n"
            elif source.startswith("\r", body_end):
                _append_run(runs, "\r", style)
                pos = body_end + 1
                continue
            else:
                terminator = "\n"
            _append_run(runs, terminator, style)
            pos = body_end + len(terminator)
            lines.append(tuple(runs))
            runs = []
    if runs:
        lines.append(tuple(runs))
    return lines


def plain_lines(source: str) -> list[StyledLine]:
    """Split ``source`` into unstyled lines (used when color is disabled)."""
    return [plain_line(line) for line in split_lines(source)]


__all__ = [
    "DEFAULT_STYLE",
    "Color",
    "SpanStyle",
    "PLAIN_STYLE",
    "StyledRun",
    "StyledLine",
    "plain_line",
    "plain_lines",
    "line_text",
    "split_lines",
    "lexer_for_extension",
    "style_class",
    "highlight_lines",
]
