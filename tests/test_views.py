"""Tests for termdom.views -- static views and stacking."""

from __future__ import annotations

import pytest

from termdom.frame import Frame
from termdom.layout import Direction, Length, Rect, Size
from termdom.style import Color, Style
from termdom.views import (
    Alignment,
    Block,
    Empty,
    MutView,
    Paragraph,
    SizedView,
    Span,
    Stack,
    View,
    prefers_size,
)


def draw(view: View, width: int, height: int) -> list[str]:
    frame = Frame(width, height)
    view.render(frame, frame.area)
    return frame.plain_lines()


class RecordingView:
    """Remembers the area it was last drawn into."""

    def __init__(self, size: Size | None = None) -> None:
        self.size = size
        self.area: Rect | None = None

    def render(self, frame: Frame, area: Rect) -> None:
        self.area = area

    def preferred_size(self) -> Size | None:
        return self.size


class TestEmpty:
    def test_draws_nothing(self) -> None:
        assert draw(Empty(), 3, 1) == ["   "]

    def test_is_a_view(self) -> None:
        assert isinstance(Empty(), View)


class TestMutViewDefaults:
    def test_hooks_are_noops(self) -> None:
        view = MutView()
        assert view.preferred_size() is None
        assert not view.is_focusable()
        view.on_focus()
        view.on_unfocus()
        view.on_paste("x")

    def test_render_must_be_overridden(self) -> None:
        with pytest.raises(NotImplementedError):
            MutView().render(Frame(1, 1), Rect(0, 0, 1, 1), False)


class TestParagraph:
    def test_lines(self) -> None:
        assert draw(Paragraph("hello\n你好"), 6, 2) == ["hello ", "你好  "]

    def test_clipped_without_wrap(self) -> None:
        assert draw(Paragraph("hello world"), 5, 2) == ["hello", "     "]

    def test_wrapped(self) -> None:
        assert draw(Paragraph("hello world").wrapped(), 5, 2) == ["hello", "world"]

    def test_extra_lines_are_dropped(self) -> None:
        assert draw(Paragraph("a\nb\nc"), 1, 2) == ["a", "b"]

    def test_alignment(self) -> None:
        assert draw(Paragraph("ab").aligned(Alignment.RIGHT), 5, 1) == ["   ab"]
        assert draw(Paragraph("ab").aligned(Alignment.CENTER), 6, 1) == ["  ab  "]

    def test_style_fills_area(self) -> None:
        frame = Frame(3, 1)
        Paragraph("a").bg(Color.LIGHT_CYAN).fg(Color.BLACK).render(frame, frame.area)
        assert frame.cell(2, 0).style == Style(fg=Color.BLACK, bg=Color.LIGHT_CYAN)

    def test_boxed(self) -> None:
        lines = draw(Paragraph("hi").boxed(Block(title="T")), 6, 3)
        assert lines == ["┌T───┐", "│hi  │", "└────┘"]

    def test_spans(self) -> None:
        frame = Frame(4, 1)
        paragraph = Paragraph.from_spans([Span("ab"), Span("c", Style(bold=True))])
        paragraph.render(frame, frame.area)
        assert frame.plain_lines() == ["abc "]
        assert frame.cell(2, 0).style.bold
        assert not frame.cell(1, 0).style.bold

    def test_wrapped_spans(self) -> None:
        paragraph = Paragraph.from_spans([Span("abc"), Span("de")]).wrapped()
        assert draw(paragraph, 3, 2) == ["abc", "de "]


class TestBlock:
    def test_borders(self) -> None:
        assert draw(Block(), 3, 3) == ["┌─┐", "│ │", "└─┘"]

    def test_inner(self) -> None:
        assert Block().inner(Rect(0, 0, 5, 4)) == Rect(1, 1, 3, 2)
        assert Block(borders=False).inner(Rect(0, 0, 5, 4)) == Rect(0, 0, 5, 4)

    def test_long_title_is_truncated(self) -> None:
        assert draw(Block(title="abcdef"), 4, 2)[0] == "┌ab┐"


class TestSizedView:
    def test_prefers_size_from_tuple(self) -> None:
        sized = prefers_size(Empty(), (16, 16))
        assert isinstance(sized, SizedView)
        assert sized.preferred_size() == Size(16, 16)

    def test_delegates_render(self) -> None:
        inner = RecordingView()
        prefers_size(inner, Size(1, 1)).render(Frame(4, 4), Rect(0, 0, 4, 4))
        assert inner.area == Rect(0, 0, 4, 4)


class TestStack:
    def test_equal_split_horizontal(self) -> None:
        children = [RecordingView() for _ in range(3)]
        Stack.equal_split(Direction.HORIZONTAL, children).render(Frame(9, 2), Rect(0, 0, 9, 2))
        assert [c.area for c in children] == [
            Rect(0, 0, 3, 2),
            Rect(3, 0, 3, 2),
            Rect(6, 0, 3, 2),
        ]

    def test_preferred_size_gets_its_length(self) -> None:
        sized = RecordingView(Size(16, 16))
        rest = RecordingView()
        Stack.horizontal([sized, rest]).render(Frame(40, 30), Rect(0, 0, 40, 30))
        assert sized.area == Rect(0, 0, 16, 16)
        assert rest.area == Rect(16, 0, 24, 30)

    def test_cross_axis_clamped_in_vertical_stack(self) -> None:
        sized = RecordingView(Size(5, 4))
        Stack.vertical([sized, RecordingView()]).render(Frame(20, 10), Rect(0, 0, 20, 10))
        assert sized.area == Rect(0, 0, 5, 4)

    def test_zero_means_no_preference(self) -> None:
        sized = RecordingView(Size(0, 4))
        rest = RecordingView()
        Stack.vertical([rest, sized]).render(Frame(20, 10), Rect(0, 0, 20, 10))
        assert rest.area == Rect(0, 0, 20, 6)
        assert sized.area == Rect(0, 6, 20, 4)

    def test_zero_on_stack_axis_shares_the_rest(self) -> None:
        sized = RecordingView(Size(0, 4))
        rest = RecordingView()
        Stack.horizontal([sized, rest]).render(Frame(10, 10), Rect(0, 0, 10, 10))
        assert sized.area == Rect(0, 0, 5, 4)
        assert rest.area == Rect(5, 0, 5, 10)

    def test_views_without_preferred_size_method(self) -> None:
        class Bare:
            area: Rect | None = None

            def render(self, frame: Frame, area: Rect) -> None:
                self.area = area

        a, b = Bare(), Bare()
        Stack.horizontal([a, b]).render(Frame(4, 1), Rect(0, 0, 4, 1))
        assert a.area == Rect(0, 0, 2, 1)
        assert b.area == Rect(2, 0, 2, 1)

    def test_explicit_constraints(self) -> None:
        a, b = RecordingView(), RecordingView()
        Stack(Direction.VERTICAL, [a, b], [Length(1), Length(2)]).render(
            Frame(3, 5), Rect(0, 0, 3, 5)
        )
        assert a.area == Rect(0, 0, 3, 1)
        assert b.area == Rect(0, 1, 3, 2)

    def test_constraint_count_must_match(self) -> None:
        with pytest.raises(ValueError):
            Stack(Direction.VERTICAL, [Empty()], [Length(1), Length(2)])

    def test_nested_stacks_draw_text(self) -> None:
        root = Stack.equal_split(
            Direction.HORIZONTAL,
            [Paragraph("ab"), Stack.vertical([Paragraph("c"), Paragraph("d")])],
        )
        assert draw(root, 4, 2) == ["abc ", "  d "]
