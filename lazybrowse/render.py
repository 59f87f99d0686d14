"""Rendering for the browser screen.

``project`` maps navigation state plus a viewport to a ``RenderPlan`` of
bordered, styled regions. ``compose_frame`` turns a plan into one ANSI string
and ``draw_frame`` writes it to the terminal. Only ``draw_frame`` does I/O.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from .ansi import RESET, render_styled_line, sgr_for_style
from .highlight import SpanStyle, StyledLine, StyledRun
from .layout import Rect, Viewport, effective_scroll_offset, entry_window_start, split_layout
from .listing import Entry
from .preview import MAX_PREVIEW_BYTES
from .state import NavigationState, PreviewState
from .ui_theme import DEFAULT_THEME, UITheme

DIRECTORY_PREFIX = "📁 "
FILE_PREFIX = "   "
HIDDEN_INDICATOR = " • hidden"

KEY_HINTS: tuple[tuple[str, str], ...] = (
    ("↑/↓", "or "),
    ("k/j", "move  "),
    ("Enter/l", "open  "),
    ("h", "up  "),
    ("H", "toggle hidden  "),
    ("Esc", "close preview / quit  "),
    ("j/k", "scroll in preview  "),
    ("q", "quit"),
)


@dataclass(frozen=True)
class Region:
    """One bordered box on screen with a title and content rows."""

    rect: Rect
    title: StyledLine
    lines: tuple[StyledLine, ...]
    border_style: SpanStyle


@dataclass(frozen=True)
class RenderPlan:
    """Everything needed to draw one frame.

    ``preview_offset`` is the clamped scroll offset actually used for the
    preview body (``0`` when no preview is open).
    """

    viewport: Viewport
    path_bar: Region
    entries: Region
    preview: Region | None
    key_hints: Region
    entry_offset: int = 0
    preview_offset: int = 0

    @property
    def regions(self) -> tuple[Region, ...]:
        if self.preview is None:
            return (self.path_bar, self.entries, self.key_hints)
        return (self.path_bar, self.entries, self.preview, self.key_hints)


def _title(text: str, theme: UITheme) -> StyledLine:
    return ((text, theme.title),)


def path_bar_title(show_hidden: bool) -> str:
    if show_hidden:
        return f" Path{HIDDEN_INDICATOR} "
    return " Path "


def preview_title(preview: PreviewState) -> str:
    name = preview.file_path.name or "Preview"
    if preview.truncated:
        return f" {name} (first {MAX_PREVIEW_BYTES // 1024} KB) "
    return f" {name} "


def entry_label(entry: Entry) -> str:
    prefix = DIRECTORY_PREFIX if entry.is_dir else FILE_PREFIX
    return f"{prefix}{entry.name}"


def key_hint_line(theme: UITheme) -> StyledLine:
    runs: list[StyledRun] = []
    for key, description in KEY_HINTS:
        runs.append((f" {key} ", theme.hint_key))
        runs.append((description, theme.hint_text))
    return tuple(runs)


def _entry_lines(
    state: NavigationState,
    start: int,
    visible_rows: int,
    theme: UITheme,
) -> tuple[StyledLine, ...]:
    lines: list[StyledLine] = []
    for idx in range(start, min(len(state.listing), start + visible_rows)):
        entry = state.listing[idx]
        style = theme.entry_selected if idx == state.selected_index else theme.entry_text
        lines.append(((entry_label(entry), style),))
    return tuple(lines)


def project(
    state: NavigationState,
    viewport: Viewport,
    theme: UITheme = DEFAULT_THEME,
) -> RenderPlan:
    """Compute the regions for ``state`` on a ``viewport``-sized screen."""
    layout = split_layout(viewport, state.preview_open)

    path_bar = Region(
        rect=layout.path_bar,
        title=_title(path_bar_title(state.show_hidden), theme),
        lines=(((str(state.current_directory), theme.path_text),),),
        border_style=theme.border,
    )

    entry_rows = layout.entries.inner_height
    entry_offset = entry_window_start(state.selected_index, len(state.listing), entry_rows)
    entries = Region(
        rect=layout.entries,
        title=_title(" Entries ", theme),
        lines=_entry_lines(state, entry_offset, entry_rows, theme),
        border_style=theme.border,
    )

    preview_region: Region | None = None
    preview_offset = 0
    if state.preview is not None and layout.preview is not None:
        preview = state.preview
        body_rows = layout.preview.inner_height
        preview_offset = effective_scroll_offset(
            preview.scroll_offset,
            len(preview.styled_lines),
            body_rows,
        )
        preview_region = Region(
            rect=layout.preview,
            title=_title(preview_title(preview), theme),
            lines=preview.styled_lines[preview_offset : preview_offset + body_rows],
            border_style=theme.preview_border,
        )

    key_hints = Region(
        rect=layout.key_hints,
        title=_title(" Keys ", theme),
        lines=(key_hint_line(theme),),
        border_style=theme.border,
    )

    return RenderPlan(
        viewport=viewport,
        path_bar=path_bar,
        entries=entries,
        preview=preview_region,
        key_hints=key_hints,
        entry_offset=entry_offset,
        preview_offset=preview_offset,
    )


def _paint(text: str, style: SpanStyle) -> str:
    sgr = sgr_for_style(style)
    if not sgr or not text:
        return text
    return f"{sgr}{text}{RESET}"


def region_rows(region: Region) -> list[str]:
    """Draw ``region`` as ``rect.height`` rows, each exactly ``rect.width`` wide."""
    width = region.rect.width
    height = region.rect.height
    if width < 2 or height < 2:
        return [" " * max(0, width) for _ in range(max(0, height))]

    inner = width - 2
    border = region.border_style
    title_text, title_cols = render_styled_line(region.title, inner)
    rows = [
        _paint("┌", border) + title_text + _paint("─" * (inner - title_cols) + "┐", border)
    ]
    for row in range(height - 2):
        if row < len(region.lines):
            body, used = render_styled_line(region.lines[row], inner)
        else:
            body, used = "", 0
        rows.append(_paint("│", border) + body + " " * (inner - used) + _paint("│", border))
    rows.append(_paint("└" + "─" * inner + "┘", border))
    return rows


def compose_frame(plan: RenderPlan) -> str:
    """Compose ``plan`` into one ANSI string covering the whole viewport."""
    total_rows = max(0, plan.viewport.rows)
    screen: list[list[tuple[int, str]]] = [[] for _ in range(total_rows)]
    for region in plan.regions:
        for offset, row_text in enumerate(region_rows(region)):
            y = region.rect.y + offset
            if 0 <= y < total_rows:
                screen[y].append((region.rect.x, row_text))

    out: list[str] = ["\033[H"]
    for y, segments in enumerate(screen):
        if y:
            out.append("\r\n")
        segments.sort(key=lambda item: item[0])
        out.extend(text for _x, text in segments)
    return "".join(out)


def draw_frame(frame: str) -> None:
    """Write a composed frame to stdout in a single write."""
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))


__all__ = [
    "DIRECTORY_PREFIX",
    "FILE_PREFIX",
    "KEY_HINTS",
    "Region",
    "RenderPlan",
    "path_bar_title",
    "preview_title",
    "entry_label",
    "key_hint_line",
    "project",
    "region_rows",
    "compose_frame",
    "draw_frame",
]
