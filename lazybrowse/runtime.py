"""Main interactive event loop for the terminal UI.

Alternates between drawing the current state and waiting (with a timeout) for
the next key. Each key is mapped to an action and applied synchronously.
"""

from __future__ import annotations

import os
import shutil
import sys
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from .highlight import DEFAULT_STYLE
from .input import read_key as default_read_key
from .keys import KeyMap
from .layout import Viewport
from .listing import list_directory
from .navigation import (
    Action,
    Lister,
    Loader,
    apply_action,
    initial_state,
    select_name,
)
from .preview import load_preview
from .render import compose_frame, draw_frame, project
from .state import NavigationState
from .terminal import TerminalController
from .ui_theme import DEFAULT_THEME, UITheme

POLL_TIMEOUT_MS = 100


def build_initial_state(
    path: Path,
    show_hidden: bool = False,
    style: str = DEFAULT_STYLE,
    color: bool = True,
    lister: Lister = list_directory,
    loader: Loader = load_preview,
) -> NavigationState:
    """Start in ``path``, or in its parent with ``path`` previewed for files."""
    target = path.resolve()
    if target.is_dir():
        return initial_state(target, show_hidden, style, color, lister)

    state = initial_state(target.parent, show_hidden, style, color, lister)
    state = select_name(state, target.name)
    if state.selected_entry is not None and state.selected_entry.name == target.name:
        state = apply_action(state, Action.ACTIVATE, lister, loader).state
    return state


def run_main_loop(
    state: NavigationState,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme = DEFAULT_THEME,
    keymap: KeyMap | None = None,
    *,
    read_key: Callable[..., str] = default_read_key,
    get_terminal_size: Callable[[tuple[int, int]], os.terminal_size] = shutil.get_terminal_size,
    draw: Callable[[str], None] = draw_frame,
    lister: Lister = list_directory,
    loader: Loader = load_preview,
) -> NavigationState:
    """Run the TUI until a quit action and return the final state.

    A frame is written only when its composed text differs from the last one,
    which also covers terminal resizes.
    """
    keymap = keymap if keymap is not None else KeyMap()
    last_frame: str | None = None
    with terminal.raw_mode():
        while True:
            term = get_terminal_size((80, 24))
            viewport = Viewport(columns=term.columns, rows=term.lines)
            frame = compose_frame(project(state, viewport, theme))
            if frame != last_frame:
                draw(frame)
                last_frame = frame

            key = read_key(stdin_fd, timeout_ms=POLL_TIMEOUT_MS)
            if not key:
                continue
            action = keymap.action_for(key)
            if action is None:
                continue
            transition = apply_action(state, action, lister, loader)
            state = transition.state
            if transition.quit:
                logger.debug("quit requested in {}", state.current_directory)
                return state


def run_browser(
    path: Path,
    show_hidden: bool = False,
    style: str = DEFAULT_STYLE,
    theme: UITheme = DEFAULT_THEME,
    color: bool = True,
) -> NavigationState:
    """Initialize state and the terminal, then run the event loop.

    Raises ``termios.error`` when stdin is not a usable terminal.
    """
    state = build_initial_state(path, show_hidden, style, color)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    logger.info("browsing {}", state.current_directory)
    return run_main_loop(state, terminal, stdin_fd, theme)


__all__ = [
    "POLL_TIMEOUT_MS",
    "build_initial_state",
    "run_main_loop",
    "run_browser",
]
