"""Navigation state machine.

Every transition takes a ``NavigationState`` and returns a new one. The only
side effects are the directory listing and file loading calls, which are
injected so tests can substitute them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from loguru import logger

from .highlight import DEFAULT_STYLE, StyledLine
from .listing import Entry, has_parent, list_directory
from .preview import load_preview
from .state import NavigationState, PreviewState, clamp_selection

Lister = Callable[[Path, bool], tuple[Entry, ...]]
Loader = Callable[[Path, str, bool], tuple[list[StyledLine], bool]]


class Action(Enum):
    """Input events understood by the state machine."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    # Scroll the preview when it is open, otherwise move the selection.
    LINE_UP = "line_up"
    LINE_DOWN = "line_down"
    ACTIVATE = "activate"
    PARENT = "parent"
    TOGGLE_HIDDEN = "toggle_hidden"
    CANCEL = "cancel"
    QUIT = "quit"


@dataclass(frozen=True)
class Transition:
    """Result of applying one action."""

    state: NavigationState
    quit: bool = False


def relist(state: NavigationState, lister: Lister = list_directory) -> NavigationState:
    """Rebuild the listing for the current directory and clamp the selection."""
    listing = tuple(lister(state.current_directory, state.show_hidden))
    return replace(
        state,
        listing=listing,
        selected_index=clamp_selection(state.selected_index, len(listing)),
    )


def initial_state(
    directory: Path,
    show_hidden: bool = False,
    style: str = DEFAULT_STYLE,
    color: bool = True,
    lister: Lister = list_directory,
) -> NavigationState:
    """Build the starting state for ``directory`` (made absolute)."""
    state = NavigationState(
        current_directory=directory.resolve(),
        show_hidden=show_hidden,
        style=style,
        color=color,
    )
    return relist(state, lister)


def change_directory(
    state: NavigationState,
    directory: Path,
    lister: Lister = list_directory,
) -> NavigationState:
    logger.debug("enter directory {}", directory)
    return relist(replace(state, current_directory=directory, selected_index=0), lister)


def move_selection(state: NavigationState, delta: int) -> NavigationState:
    """Move the selection by ``delta`` rows, saturating at both ends."""
    if not state.listing:
        return state
    return replace(state, selected_index=clamp_selection(state.selected_index + delta, len(state.listing)))


def select_name(state: NavigationState, name: str) -> NavigationState:
    """Select the entry called ``name`` when present; otherwise keep the selection."""
    for idx, entry in enumerate(state.listing):
        if entry.name == name:
            return replace(state, selected_index=idx)
    return state


def scroll_preview(state: NavigationState, delta: int) -> NavigationState:
    """Move the preview scroll offset by ``delta``, never below zero.

    The upper bound depends on the viewport and is applied at render time.
    """
    if state.preview is None:
        return state
    offset = max(0, state.preview.scroll_offset + delta)
    return replace(state, preview=replace(state.preview, scroll_offset=offset))


def step_line(state: NavigationState, delta: int) -> NavigationState:
    """Line step key: scroll an open preview, otherwise move the selection."""
    if state.preview_open:
        return scroll_preview(state, delta)
    return move_selection(state, delta)


def go_to_parent(state: NavigationState, lister: Lister = list_directory) -> NavigationState:
    directory = state.current_directory
    if not has_parent(directory):
        return state
    return change_directory(state, directory.parent, lister)


def open_preview(
    state: NavigationState,
    path: Path,
    loader: Loader = load_preview,
) -> NavigationState:
    """Load ``path`` into a fresh preview scrolled to the top."""
    styled_lines, truncated = loader(path, state.style, state.color)
    logger.debug("preview {} ({} lines, truncated={})", path, len(styled_lines), truncated)
    preview = PreviewState(
        file_path=path,
        styled_lines=tuple(styled_lines),
        scroll_offset=0,
        truncated=truncated,
    )
    return replace(state, preview=preview)


def activate_selection(
    state: NavigationState,
    lister: Lister = list_directory,
    loader: Loader = load_preview,
) -> NavigationState:
    """Enter the selected directory, go up for ``..``, or preview a file."""
    entry = state.selected_entry
    if entry is None:
        return state
    if entry.is_parent:
        return go_to_parent(state, lister)

    target = state.current_directory / entry.name
    if entry.is_dir:
        if target.is_dir():
            return change_directory(state, target, lister)
        return state
    if target.is_file():
        return open_preview(state, target, loader)
    return state


def toggle_hidden(state: NavigationState, lister: Lister = list_directory) -> NavigationState:
    """Flip hidden-file visibility; the selection keeps its numeric position."""
    return relist(replace(state, show_hidden=not state.show_hidden), lister)


def close_preview(state: NavigationState) -> NavigationState:
    return replace(state, preview=None)


def apply_action(
    state: NavigationState,
    action: Action,
    lister: Lister = list_directory,
    loader: Loader = load_preview,
) -> Transition:
    """Apply ``action`` to ``state`` and report whether the program should quit."""
    if action is Action.QUIT:
        return Transition(state, quit=True)
    if action is Action.CANCEL:
        if state.preview_open:
            return Transition(close_preview(state))
        return Transition(state, quit=True)
    if action is Action.MOVE_UP:
        return Transition(move_selection(state, -1))
    if action is Action.MOVE_DOWN:
        return Transition(move_selection(state, 1))
    if action is Action.LINE_UP:
        return Transition(step_line(state, -1))
    if action is Action.LINE_DOWN:
        return Transition(step_line(state, 1))
    if action is Action.ACTIVATE:
        return Transition(activate_selection(state, lister, loader))
    if action is Action.PARENT:
        return Transition(go_to_parent(state, lister))
    if action is Action.TOGGLE_HIDDEN:
        return Transition(toggle_hidden(state, lister))
    raise ValueError(f"unknown action: {action!r}")


__all__ = [
    "Action",
    "Transition",
    "Lister",
    "Loader",
    "relist",
    "initial_state",
    "change_directory",
    "move_selection",
    "select_name",
    "scroll_preview",
    "step_line",
    "go_to_parent",
    "open_preview",
    "activate_selection",
    "toggle_hidden",
    "close_preview",
    "apply_action",
]
