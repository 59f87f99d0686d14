"""ANSI styling and display-width helpers.

Turns styled runs into SGR-decorated text clipped to a column budget.
Width math accounts for tabs, combining marks, and East Asian wide chars.
"""

from __future__ import annotations

import re
import unicodedata

from .highlight import SpanStyle, StyledLine

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return display columns of ``text`` ignoring ANSI escape sequences."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def sgr_for_style(style: SpanStyle) -> str:
    """Return the SGR escape for ``style`` or ``""`` when it is the default."""
    params: list[str] = []
    if style.bold:
        params.append("1")
    if style.italic:
        params.append("3")
    if style.underline:
        params.append("4")
    foreground = style.foreground
    if isinstance(foreground, tuple):
        red, green, blue = foreground
        params.append(f"38;2;{red};{green};{blue}")
    elif foreground is not None:
        params.append(f"38;5;{foreground}")
    if not params:
        return ""
    return f"\033[{';'.join(params)}m"


def render_styled_line(
    line: StyledLine,
    max_cols: int,
) -> tuple[str, int]:
    """Render ``line`` into at most ``max_cols`` columns.

    Returns ``(text, used_columns)``. Line terminators are dropped, tabs are
    expanded, control bytes are escaped, and a wide character that would
    straddle the edge is left out.
    """
    if max_cols <= 0:
        return "", 0

    out: list[str] = []
    col = 0
    for text, style in line:
        if col >= max_cols:
            break
        text = sanitize_terminal_text(text.rstrip("\r\n")).replace("\r", "\\x0d")
        if not text:
            continue
        sgr = sgr_for_style(style)
        if sgr:
            out.append(sgr)
        for ch in text:
            w = char_display_width(ch, col)
            if col + w > max_cols:
                if ch == "\t":
                    out.append(" " * (max_cols - col))
                    col = max_cols
                break
            out.append(" " * w if ch == "\t" else ch)
            col += w
        if sgr:
            out.append(RESET)
    return "".join(out), col


__all__ = [
    "ANSI_ESCAPE_RE",
    "TAB_STOP",
    "RESET",
    "char_display_width",
    "display_width",
    "sanitize_terminal_text",
    "sgr_for_style",
    "render_styled_line",
]
