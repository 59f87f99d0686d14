"""Tests for raw-mode lifecycle and tty restoration."""

from __future__ import annotations

import unittest
from unittest import mock

from lazybrowse.terminal import ENTER_TUI_SEQUENCE, LEAVE_TUI_SEQUENCE, TerminalController


class TerminalControllerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.termios = mock.patch("lazybrowse.terminal.termios").start()
        self.tty = mock.patch("lazybrowse.terminal.tty").start()
        self.write = mock.patch("lazybrowse.terminal.os.write").start()
        self.addCleanup(mock.patch.stopall)
        self.saved = ["saved-attrs"]
        self.termios.tcgetattr.return_value = self.saved

    def test_raw_mode_enters_and_restores(self) -> None:
        terminal = TerminalController(0, 1)

        with terminal.raw_mode():
            self.tty.setraw.assert_called_once_with(0, self.termios.TCSAFLUSH)
            self.write.assert_called_once_with(1, ENTER_TUI_SEQUENCE)

        self.write.assert_called_with(1, LEAVE_TUI_SEQUENCE)
        self.termios.tcsetattr.assert_called_once_with(0, self.termios.TCSAFLUSH, self.saved)

    def test_tty_state_is_restored_when_body_raises(self) -> None:
        terminal = TerminalController(0, 1)

        with self.assertRaises(RuntimeError):
            with terminal.raw_mode():
                raise RuntimeError("boom")

        self.termios.tcsetattr.assert_called_once_with(0, self.termios.TCSAFLUSH, self.saved)

    def test_tty_state_is_restored_when_leave_sequence_write_fails(self) -> None:
        terminal = TerminalController(0, 1)
        self.write.side_effect = OSError("closed")

        with self.assertRaises(OSError):
            terminal.disable_tui_mode()

        self.termios.tcsetattr.assert_called_once_with(0, self.termios.TCSAFLUSH, self.saved)

    def test_tty_state_is_restored_when_enter_fails(self) -> None:
        terminal = TerminalController(0, 1)
        self.tty.setraw.side_effect = OSError("not a tty")

        with self.assertRaises(OSError):
            with terminal.raw_mode():
                self.fail("body should not run")

        self.termios.tcsetattr.assert_called_once_with(0, self.termios.TCSAFLUSH, self.saved)


if __name__ == "__main__":
    unittest.main()
