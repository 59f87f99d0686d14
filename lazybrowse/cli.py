"""Command-line front door for lazybrowse.

Parses CLI options, merges them with config-file defaults, and resolves the
start path. Then dispatches into the interactive browser runtime or prints a
single rendered frame.
"""

from __future__ import annotations

import argparse
import os
import shutil
import sys
import termios
from pathlib import Path

from loguru import logger

from .ansi import ANSI_ESCAPE_RE
from .config import load_config, load_show_hidden, load_style_name, load_theme_name
from .highlight import DEFAULT_STYLE
from .layout import Viewport
from .logs import init_logging
from .render import compose_frame, project
from .runtime import build_initial_state, run_browser
from .ui_theme import UITheme, available_theme_names, resolve_theme


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def render_browser_view(
    path: Path,
    show_hidden: bool,
    style: str,
    theme: UITheme,
    color: bool,
    columns: int,
    rows: int,
) -> str:
    """Render one browser frame for ``path`` as newline-separated text."""
    state = build_initial_state(path, show_hidden, style, color)
    frame = compose_frame(project(state, Viewport(columns=columns, rows=rows), theme))
    body = frame.removeprefix("\033[H").replace("\r\n", "\n")
    if not color:
        body = ANSI_ESCAPE_RE.sub("", body)
    return body + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse directories in the terminal with a syntax-highlighted file preview."
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory to open, or a file to open with its preview. Defaults to current directory.",
    )
    parser.add_argument("--style", default=None, help=f"Pygments style name (default: {DEFAULT_STYLE}).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable syntax and UI colors.")
    parser.add_argument("--show-hidden", action="store_true", help="Start with hidden files visible.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument("--log-level", default="INFO", help="Log level for --log-file (default: INFO).")
    parser.add_argument("--render", action="store_true", help="Print one frame for PATH and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --render output (default: terminal width).",
    )
    parser.add_argument(
        "--max-rows",
        type=_positive_int,
        default=None,
        help="Row count for --render output (default: terminal height).",
    )
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch lazybrowse.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    init_logging(args.log_file, args.log_level.upper())

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path) if args.path else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    config = load_config()
    style = args.style or load_style_name(config) or DEFAULT_STYLE
    theme = resolve_theme("plain" if args.no_color else (args.theme or load_theme_name(config)))
    show_hidden = args.show_hidden or load_show_hidden(config)
    color = not args.no_color

    if args.render:
        term = shutil.get_terminal_size((80, 24))
        columns = args.max_cols if args.max_cols is not None else max(1, term.columns)
        rows = args.max_rows if args.max_rows is not None else max(1, term.lines)
        sys.stdout.write(render_browser_view(path, show_hidden, style, theme, color, columns, rows))
        return

    if not os.isatty(sys.stdin.fileno()):
        raise SystemExit("lazybrowse needs an interactive terminal (use --render to print one frame).")

    try:
        run_browser(path, show_hidden=show_hidden, style=style, theme=theme, color=color)
    except (termios.error, OSError) as exc:
        logger.exception("terminal failure")
        raise SystemExit(f"Terminal error: {exc}") from exc


if __name__ == "__main__":
    main()
