"""Tests for termdom.frame and termdom.style -- the cell grid and SGR output."""

from __future__ import annotations

from termdom.frame import Frame
from termdom.layout import Rect
from termdom.style import Color, Style


class TestStyle:
    def test_empty_style_has_no_sgr(self) -> None:
        assert Style().sgr() == ""

    def test_sgr_codes(self) -> None:
        style = Style(fg=Color.BLACK, bg=Color.WHITE, bold=True)
        assert style.sgr() == "\x1b[1;30;107m"

    def test_patch_only_overrides_set_fields(self) -> None:
        base = Style(fg=Color.WHITE, bold=True)
        patched = base.patch(Style(bg=Color.LIGHT_BLUE, bold=False))
        assert patched == Style(fg=Color.WHITE, bg=Color.LIGHT_BLUE, bold=False)

    def test_with_fg_and_bg(self) -> None:
        assert Style().with_fg(Color.RED).with_bg(Color.BLUE) == Style(fg=Color.RED, bg=Color.BLUE)

    def test_color_codes(self) -> None:
        assert Color.DARK_GRAY.fg_code == 90
        assert Color.DARK_GRAY.bg_code == 100


class TestFrameSetString:
    def test_writes_text(self) -> None:
        frame = Frame(5, 1)
        assert frame.set_string(0, 0, "hi") == 2
        assert frame.plain_lines() == ["hi   "]

    def test_clips_at_edge(self) -> None:
        frame = Frame(3, 1)
        frame.set_string(1, 0, "hello")
        assert frame.plain_lines() == [" he"]

    def test_max_width(self) -> None:
        frame = Frame(10, 1)
        assert frame.set_string(0, 0, "hello", max_width=2) == 2
        assert frame.plain_lines()[0].startswith("he ")

    def test_wide_character_takes_two_cells(self) -> None:
        frame = Frame(4, 1)
        assert frame.set_string(0, 0, "文本") == 4
        assert frame.cell(0, 0).symbol == "文"
        assert frame.cell(1, 0).symbol == ""
        assert frame.plain_lines() == ["文本"]

    def test_wide_character_that_does_not_fit_is_dropped(self) -> None:
        frame = Frame(3, 1)
        assert frame.set_string(0, 0, "文本") == 2
        assert frame.plain_lines() == ["文 "]

    def test_overwriting_half_of_wide_character_blanks_it(self) -> None:
        frame = Frame(4, 1)
        frame.set_string(0, 0, "文")
        frame.set_string(1, 0, "x")
        assert frame.plain_lines() == [" x  "]

    def test_row_outside_frame_is_ignored(self) -> None:
        frame = Frame(3, 1)
        assert frame.set_string(0, 5, "abc") == 0
        assert frame.plain_lines() == ["   "]

    def test_style_is_applied(self) -> None:
        frame = Frame(2, 1)
        frame.set_string(0, 0, "a", Style(fg=Color.RED))
        assert frame.cell(0, 0).style == Style(fg=Color.RED)
        assert frame.cell(1, 0).style == Style()


class TestFrameFill:
    def test_fill_patches_style(self) -> None:
        frame = Frame(3, 2)
        frame.fill(Rect(1, 0, 5, 1), Style(bg=Color.BLUE))
        assert frame.cell(0, 0).style == Style()
        assert frame.cell(1, 0).style == Style(bg=Color.BLUE)
        assert frame.cell(2, 0).style == Style(bg=Color.BLUE)
        assert frame.cell(1, 1).style == Style()

    def test_text_keeps_filled_background(self) -> None:
        frame = Frame(2, 1)
        frame.fill(frame.area, Style(bg=Color.BLUE))
        frame.set_string(0, 0, "a", Style(fg=Color.RED))
        assert frame.cell(0, 0).style == Style(fg=Color.RED, bg=Color.BLUE)


class TestFrameToLines:
    def test_plain_line_is_reset_wrapped(self) -> None:
        frame = Frame(2, 1)
        frame.set_string(0, 0, "ab")
        assert frame.to_lines() == ["\x1b[0mab\x1b[0m"]

    def test_style_changes_emit_sgr(self) -> None:
        frame = Frame(3, 1)
        frame.set_string(0, 0, "a")
        frame.set_string(1, 0, "b", Style(bold=True))
        assert frame.to_lines() == ["\x1b[0ma\x1b[0m\x1b[1mb\x1b[0m \x1b[0m"]

    def test_wide_character_continuation_is_skipped(self) -> None:
        frame = Frame(2, 1)
        frame.set_string(0, 0, "文")
        assert frame.to_lines() == ["\x1b[0m文\x1b[0m"]
