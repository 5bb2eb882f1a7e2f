"""Regression tests for ANSI clipping and document colorization.

Pane rows are clipped with styling intact, and colorized documents keep one
display line per source line so cursor numbers stay aligned.
"""

import tempfile
import unittest
from pathlib import Path

from suttaviewer.runtime import ansi as ansi_mod
from suttaviewer.runtime import syntax


class AnsiClippingTests(unittest.TestCase):
    def test_clip_preserves_escape_sequences(self) -> None:
        clipped = ansi_mod.clip_ansi_line("\x1b[31mabcdef\x1b[0m", 3)

        self.assertEqual(clipped, "\x1b[31mabc")
        self.assertEqual(ansi_mod.display_width(clipped), 3)

    def test_tabs_expand_to_tab_stops(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a\tb", 20), "a       b")

    def test_wide_characters_do_not_overflow(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("漢字", 3), "漢")

    def test_fit_pads_to_exact_width(self) -> None:
        fitted = ansi_mod.fit_ansi_line("Mūla", 6)

        self.assertEqual(fitted, "Mūla  ")
        self.assertEqual(ansi_mod.fit_ansi_line("anything", 0), "")


class WrapAnsiLineTests(unittest.TestCase):
    def test_breaks_after_last_fitting_space(self) -> None:
        self.assertEqual(ansi_mod.wrap_ansi_line("aaa bbb ccc", 7), ["aaa ", "bbb ccc"])

    def test_long_words_break_mid_word(self) -> None:
        self.assertEqual(ansi_mod.wrap_ansi_line("abcdefgh", 3), ["abc", "def", "gh"])

    def test_colour_carries_onto_continuation_rows(self) -> None:
        rows = ansi_mod.wrap_ansi_line("\x1b[31mabcdef\x1b[0m", 3)

        self.assertEqual(rows, ["\x1b[31mabc", "\x1b[31mdef\x1b[0m"])

    def test_wide_characters_move_to_next_row(self) -> None:
        self.assertEqual(ansi_mod.wrap_ansi_line("漢字", 3), ["漢", "字"])

    def test_empty_and_short_lines(self) -> None:
        self.assertEqual(ansi_mod.wrap_ansi_line("", 10), [""])
        self.assertEqual(ansi_mod.wrap_ansi_line("Evaṃ me sutaṃ", 40), ["Evaṃ me sutaṃ"])


class ColorizeLinesTests(unittest.TestCase):
    def test_no_color_returns_sanitized_plain_lines(self) -> None:
        lines = syntax.colorize_lines("one\x07\ntwo\n", Path("dn1_sc_engl"), no_color=True)

        self.assertEqual(lines, ["one\\x07", "two"])

    def test_colorized_output_keeps_line_count(self) -> None:
        source = "Evaṃ me sutaṃ\n\nekaṃ samayaṃ bhagavā\n"

        lines = syntax.colorize_lines(source, Path("dn1_sc_pali"), style="monokai")

        self.assertEqual(len(lines), 3)
        self.assertEqual([ansi_mod.strip_ansi(line) for line in lines], source.splitlines())

    def test_unknown_style_falls_back_to_default(self) -> None:
        self.assertEqual(syntax.normalize_style("no-such-style"), syntax.DEFAULT_STYLE)
        self.assertEqual(syntax.normalize_style("native"), "native")

    def test_read_text_falls_back_to_latin1(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "legacy_vri_pali"
            path.write_bytes("café".encode("latin-1"))

            self.assertEqual(syntax.read_text(path), "café")


if __name__ == "__main__":
    unittest.main()
