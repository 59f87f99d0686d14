"""Tests for the key-to-action table."""

from __future__ import annotations

import unittest

from lazybrowse.keys import KeyBinding, KeyMap
from lazybrowse.navigation import Action


class KeyMapTests(unittest.TestCase):
    def test_default_bindings(self) -> None:
        keymap = KeyMap()
        expected = {
            "UP": Action.MOVE_UP,
            "DOWN": Action.MOVE_DOWN,
            "k": Action.LINE_UP,
            "j": Action.LINE_DOWN,
            "ENTER_CR": Action.ACTIVATE,
            "ENTER_LF": Action.ACTIVATE,
            "l": Action.ACTIVATE,
            "RIGHT": Action.ACTIVATE,
            "h": Action.PARENT,
            "LEFT": Action.PARENT,
            "H": Action.TOGGLE_HIDDEN,
            "ESC": Action.CANCEL,
            "q": Action.QUIT,
            "CTRL_C": Action.QUIT,
        }
        for key, action in expected.items():
            with self.subTest(key=key):
                self.assertIs(keymap.action_for(key), action)

    def test_unbound_keys_have_no_action(self) -> None:
        keymap = KeyMap()
        for key in ("x", "Q", "UNKNOWN", "", "TAB"):
            with self.subTest(key=key):
                self.assertIsNone(keymap.action_for(key))

    def test_later_registration_overrides(self) -> None:
        keymap = KeyMap().register(KeyBinding(("q",), Action.CANCEL))

        self.assertIs(keymap.action_for("q"), Action.CANCEL)
        self.assertIs(keymap.action_for("CTRL_C"), Action.QUIT)


if __name__ == "__main__":
    unittest.main()
