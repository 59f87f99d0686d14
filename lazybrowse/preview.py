"""File preview loading.

Reads a file once (up to a byte cap) and turns it into styled lines.
Unreadable, empty, binary, and non-UTF-8 files become a single placeholder
line so the caller never has to handle an error.
"""

from __future__ import annotations

import codecs
from pathlib import Path

from loguru import logger

from .highlight import DEFAULT_STYLE, StyledLine, highlight_lines, plain_line, plain_lines

MAX_PREVIEW_BYTES = 512 * 1024
EMPTY_FILE_MESSAGE = "(empty file)"
BINARY_FILE_MESSAGE = "(binary file)"
INVALID_UTF8_MESSAGE = "(not valid UTF-8)"

_TEXT_WHITESPACE = frozenset(b" \t\r\n")


def _read_prefix(path: Path, limit: int) -> tuple[bytes, bool]:
    """Read up to ``limit`` bytes and report whether more data followed."""
    with path.open("rb") as handle:
        data = handle.read(limit + 1)
    if len(data) > limit:
        return data[:limit], True
    return data, False


def count_non_printable(data: bytes) -> int:
    """Count bytes that are neither printable ASCII nor common whitespace."""
    return sum(1 for byte in data if not (0x21 <= byte <= 0x7E) and byte not in _TEXT_WHITESPACE)


def looks_binary(data: bytes) -> bool:
    """Return whether more than a quarter of ``data`` is non-printable."""
    return count_non_printable(data) > len(data) // 4


def decode_utf8(data: bytes, truncated: bool) -> str | None:
    """Decode ``data`` strictly; return ``None`` when it is not UTF-8.

    A truncated prefix may end inside a multi-byte sequence; that incomplete
    tail is dropped rather than treated as an encoding error.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="strict")
    try:
        return decoder.decode(data, final=not truncated)
    except UnicodeDecodeError:
        return None


def extension_token(path: Path) -> str:
    """Return the extension of ``path`` without the dot, case preserved."""
    return path.suffix[1:]


def load_preview(
    path: Path,
    style: str = DEFAULT_STYLE,
    color: bool = True,
) -> tuple[list[StyledLine], bool]:
    """Load ``path`` as ``(styled_lines, truncated)``."""
    try:
        data, truncated = _read_prefix(path, MAX_PREVIEW_BYTES)
    except OSError as exc:
        logger.warning("cannot read {}: {}", path, exc)
        return [plain_line(f"Error reading: {exc}")], False

    if not data:
        return [plain_line(EMPTY_FILE_MESSAGE)], False

    if looks_binary(data):
        return [plain_line(BINARY_FILE_MESSAGE)], False

    text = decode_utf8(data, truncated)
    if text is None:
        return [plain_line(INVALID_UTF8_MESSAGE)], False

    if not color:
        return plain_lines(text), truncated
    return highlight_lines(text, extension_token(path), style), truncated


__all__ = [
    "MAX_PREVIEW_BYTES",
    "EMPTY_FILE_MESSAGE",
    "BINARY_FILE_MESSAGE",
    "INVALID_UTF8_MESSAGE",
    "count_non_printable",
    "looks_binary",
    "decode_utf8",
    "extension_token",
    "load_preview",
]
