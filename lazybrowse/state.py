"""Navigation and preview state.

State objects are immutable; transitions in ``navigation`` build new ones
with ``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .highlight import DEFAULT_STYLE, StyledLine
from .listing import Entry


@dataclass(frozen=True)
class PreviewState:
    """An open preview: which file, its styled content, and the scroll offset.

    ``scroll_offset`` may exceed the scrollable range; renderers clamp it.
    """

    file_path: Path
    styled_lines: tuple[StyledLine, ...]
    scroll_offset: int = 0
    truncated: bool = False


@dataclass(frozen=True)
class NavigationState:
    current_directory: Path
    listing: tuple[Entry, ...] = ()
    selected_index: int = 0
    show_hidden: bool = False
    preview: PreviewState | None = None
    style: str = field(default=DEFAULT_STYLE, compare=False)
    color: bool = field(default=True, compare=False)

    @property
    def preview_open(self) -> bool:
        return self.preview is not None

    @property
    def selected_entry(self) -> Entry | None:
        if 0 <= self.selected_index < len(self.listing):
            return self.listing[self.selected_index]
        return None


def clamp_selection(index: int, count: int) -> int:
    """Clamp ``index`` into ``[0, count - 1]``, or ``0`` for an empty list."""
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


__all__ = [
    "PreviewState",
    "NavigationState",
    "clamp_selection",
]
