"""Tests for ANSI styling and width-aware clipping."""

from __future__ import annotations

import unittest

from lazybrowse.ansi import (
    RESET,
    char_display_width,
    display_width,
    render_styled_line,
    sanitize_terminal_text,
    sgr_for_style,
)
from lazybrowse.highlight import PLAIN_STYLE, SpanStyle


class SgrTests(unittest.TestCase):
    def test_default_style_has_no_escape(self) -> None:
        self.assertEqual(sgr_for_style(PLAIN_STYLE), "")

    def test_attributes_and_palette_colors(self) -> None:
        self.assertEqual(sgr_for_style(SpanStyle(foreground=4, bold=True)), "\033[1;38;5;4m")
        self.assertEqual(sgr_for_style(SpanStyle(italic=True, underline=True)), "\033[3;4m")

    def test_true_color_foreground(self) -> None:
        self.assertEqual(sgr_for_style(SpanStyle(foreground=(249, 38, 114))), "\033[38;2;249;38;114m")


class WidthTests(unittest.TestCase):
    def test_char_width_rules(self) -> None:
        self.assertEqual(char_display_width("a", 0), 1)
        self.assertEqual(char_display_width("\t", 3), 5)
        self.assertEqual(char_display_width("\u0301", 0), 0)
        self.assertEqual(char_display_width("界", 0), 2)

    def test_display_width_ignores_escape_sequences(self) -> None:
        self.assertEqual(display_width("\033[1;38;5;4mabc\033[0m"), 3)

    def test_sanitize_escapes_control_bytes(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x07b\x1b[2J"), "a\\x07b\\x1b[2J")
        self.assertEqual(sanitize_terminal_text("plain\ttext"), "plain\ttext")


class RenderStyledLineTests(unittest.TestCase):
    def test_long_line_is_clipped_not_wrapped(self) -> None:
        text, used = render_styled_line((("abcdefghij\n", PLAIN_STYLE),), 4)

        self.assertEqual(text, "abcd")
        self.assertEqual(used, 4)

    def test_styled_runs_are_wrapped_in_sgr_and_reset(self) -> None:
        line = (("def", SpanStyle(bold=True)), (" f", PLAIN_STYLE))

        text, used = render_styled_line(line, 20)

        self.assertEqual(text, f"\033[1mdef{RESET} f")
        self.assertEqual(used, 5)

    def test_wide_character_at_edge_is_dropped(self) -> None:
        text, used = render_styled_line((("ab界", PLAIN_STYLE),), 3)

        self.assertEqual(text, "ab")
        self.assertEqual(used, 2)

    def test_tabs_expand_and_pad_to_the_edge(self) -> None:
        self.assertEqual(render_styled_line((("a\tb", PLAIN_STYLE),), 20), ("a       b", 9))
        self.assertEqual(render_styled_line((("a\tb", PLAIN_STYLE),), 4), ("a   ", 4))

    def test_stray_carriage_return_is_escaped(self) -> None:
        text, _used = render_styled_line((("ab\rcd\r\n", PLAIN_STYLE),), 20)

        self.assertEqual(text, "ab\\x0dcd")

    def test_zero_columns_renders_nothing(self) -> None:
        self.assertEqual(render_styled_line((("abc", PLAIN_STYLE),), 0), ("", 0))


if __name__ == "__main__":
    unittest.main()
