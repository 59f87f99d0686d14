"""Tests for the interactive loop and startup state."""

from __future__ import annotations

import contextlib
import os
import tempfile
import unittest
from pathlib import Path

from lazybrowse.highlight import plain_line
from lazybrowse.listing import PARENT_ENTRY, Entry
from lazybrowse.runtime import POLL_TIMEOUT_MS, build_initial_state, run_main_loop
from lazybrowse.state import NavigationState


class _FakeTerminal:
    def __init__(self) -> None:
        self.entered = 0
        self.exited = 0

    @contextlib.contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1


def _scripted_keys(keys: list[str]):
    pending = list(keys)
    calls: list[tuple[int, int | None]] = []

    def read_key(fd: int, timeout_ms: int | None = None) -> str:
        calls.append((fd, timeout_ms))
        if not pending:
            return "q"
        return pending.pop(0)

    read_key.calls = calls
    return read_key


def _sizes(*sizes: tuple[int, int]):
    remaining = [os.terminal_size(size) for size in sizes]

    def get_terminal_size(_fallback=(80, 24)) -> os.terminal_size:
        if len(remaining) > 1:
            return remaining.pop(0)
        return remaining[0]

    return get_terminal_size


LISTING = (PARENT_ENTRY, Entry("docs", True), Entry("a.txt", False), Entry("b.txt", False))


def _lister(_directory: Path, _show_hidden: bool):
    return LISTING


def _loader(_path: Path, _style: str, _color: bool):
    return [plain_line("hello\n")], False


def _state() -> NavigationState:
    return NavigationState(current_directory=Path("/work"), listing=LISTING)


class RunMainLoopTests(unittest.TestCase):
    def test_keys_are_applied_until_quit(self) -> None:
        terminal = _FakeTerminal()
        frames: list[str] = []
        read_key = _scripted_keys(["DOWN", "DOWN", "x", "", "DOWN", "UP", "q"])

        final = run_main_loop(
            _state(),
            terminal,
            7,
            read_key=read_key,
            get_terminal_size=_sizes((80, 24)),
            draw=frames.append,
            lister=_lister,
            loader=_loader,
        )

        self.assertEqual(final.selected_index, 2)
        self.assertEqual((terminal.entered, terminal.exited), (1, 1))
        self.assertTrue(all(call == (7, POLL_TIMEOUT_MS) for call in read_key.calls))

    def test_unchanged_frames_are_not_redrawn(self) -> None:
        frames: list[str] = []

        run_main_loop(
            _state(),
            _FakeTerminal(),
            0,
            read_key=_scripted_keys(["", "", "x", "DOWN", ""]),
            get_terminal_size=_sizes((80, 24)),
            draw=frames.append,
            lister=_lister,
            loader=_loader,
        )

        self.assertEqual(len(frames), 2)

    def test_resize_triggers_redraw(self) -> None:
        frames: list[str] = []

        run_main_loop(
            _state(),
            _FakeTerminal(),
            0,
            read_key=_scripted_keys(["", ""]),
            get_terminal_size=_sizes((80, 24), (100, 30)),
            draw=frames.append,
            lister=_lister,
            loader=_loader,
        )

        self.assertEqual(len(frames), 2)
        self.assertEqual(len(frames[-1].split("\r\n")), 30)

    def test_escape_closes_preview_before_quitting(self) -> None:
        frames: list[str] = []
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_text("hello\n", encoding="utf-8")
            state = NavigationState(current_directory=root, listing=(Entry("a.txt", False),))

            final = run_main_loop(
                state,
                _FakeTerminal(),
                0,
                read_key=_scripted_keys(["ENTER_CR", "ESC", "ESC"]),
                get_terminal_size=_sizes((80, 24)),
                draw=frames.append,
                lister=lambda _d, _h: (Entry("a.txt", False),),
                loader=_loader,
            )

        self.assertIsNone(final.preview)
        self.assertTrue(any("hello" in frame for frame in frames))

    def test_terminal_is_restored_when_loop_raises(self) -> None:
        terminal = _FakeTerminal()

        def broken_read_key(_fd: int, timeout_ms: int | None = None) -> str:
            raise OSError("stdin closed")

        with self.assertRaises(OSError):
            run_main_loop(
                _state(),
                terminal,
                0,
                read_key=broken_read_key,
                get_terminal_size=_sizes((80, 24)),
                draw=lambda _frame: None,
            )

        self.assertEqual(terminal.exited, 1)


class BuildInitialStateTests(unittest.TestCase):
    def test_directory_path_starts_in_that_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "x.txt").write_text("x\n", encoding="utf-8")

            state = build_initial_state(root)

        self.assertEqual(state.current_directory, root)
        self.assertIsNone(state.preview)
        self.assertEqual(state.selected_index, 0)

    def test_file_path_starts_in_parent_with_file_previewed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_text("a\n", encoding="utf-8")
            (root / "notes.md").write_text("# notes\n", encoding="utf-8")

            state = build_initial_state(root / "notes.md", color=False)

        self.assertEqual(state.current_directory, root)
        self.assertEqual(state.selected_entry.name, "notes.md")
        self.assertEqual(state.preview.file_path, root / "notes.md")
        self.assertEqual(len(state.preview.styled_lines), 1)

    def test_hidden_file_path_is_not_previewed_while_hidden(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".env").write_text("X=1\n", encoding="utf-8")

            hidden = build_initial_state(root / ".env")
            shown = build_initial_state(root / ".env", show_hidden=True)

        self.assertIsNone(hidden.preview)
        self.assertEqual(shown.preview.file_path, root / ".env")


if __name__ == "__main__":
    unittest.main()
