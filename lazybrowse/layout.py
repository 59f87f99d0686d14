"""Screen geometry for the browser layout.

The screen is split top to bottom into a path bar, a middle region, and a
key-hint bar. With a preview open the middle region is split 50/50 into the
entry list and the preview pane. Everything here is pure arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass

PATH_BAR_ROWS = 3
KEY_HINT_ROWS = 3
MIN_MIDDLE_ROWS = 5
BORDER_ROWS = 2
BORDER_COLUMNS = 2


@dataclass(frozen=True)
class Viewport:
    columns: int
    rows: int


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def inner_width(self) -> int:
        return max(0, self.width - BORDER_COLUMNS)

    @property
    def inner_height(self) -> int:
        return max(0, self.height - BORDER_ROWS)


@dataclass(frozen=True)
class BrowserLayout:
    """Rectangles for every region of one frame."""

    path_bar: Rect
    entries: Rect
    preview: Rect | None
    key_hints: Rect


def split_layout(viewport: Viewport, preview_open: bool) -> BrowserLayout:
    """Split ``viewport`` into the browser regions.

    The middle region never shrinks below ``MIN_MIDDLE_ROWS``; on very short
    terminals the key-hint bar is pushed past the bottom edge and clipped.
    """
    columns = max(0, viewport.columns)
    middle_rows = max(MIN_MIDDLE_ROWS, viewport.rows - PATH_BAR_ROWS - KEY_HINT_ROWS)
    path_bar = Rect(0, 0, columns, PATH_BAR_ROWS)
    middle_y = PATH_BAR_ROWS
    key_hints = Rect(0, middle_y + middle_rows, columns, KEY_HINT_ROWS)

    if not preview_open:
        return BrowserLayout(
            path_bar=path_bar,
            entries=Rect(0, middle_y, columns, middle_rows),
            preview=None,
            key_hints=key_hints,
        )

    left_width = columns // 2
    return BrowserLayout(
        path_bar=path_bar,
        entries=Rect(0, middle_y, left_width, middle_rows),
        preview=Rect(left_width, middle_y, columns - left_width, middle_rows),
        key_hints=key_hints,
    )


def effective_scroll_offset(stored_offset: int, total_lines: int, viewport_height: int) -> int:
    """Clamp a stored scroll offset to ``[0, max(0, total_lines - viewport_height)]``."""
    max_offset = max(0, total_lines - max(0, viewport_height))
    return max(0, min(stored_offset, max_offset))


def entry_window_start(selected_index: int, entry_count: int, visible_rows: int) -> int:
    """Return the first visible entry row so ``selected_index`` stays on screen."""
    if visible_rows <= 0 or entry_count <= visible_rows:
        return 0
    start = max(0, selected_index - visible_rows + 1)
    return min(start, entry_count - visible_rows)


__all__ = [
    "PATH_BAR_ROWS",
    "KEY_HINT_ROWS",
    "MIN_MIDDLE_ROWS",
    "Viewport",
    "Rect",
    "BrowserLayout",
    "split_layout",
    "effective_scroll_offset",
    "entry_window_start",
]
