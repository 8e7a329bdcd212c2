"""Views: the building blocks of a screen.

A ``View`` draws itself into a rectangle of a ``Frame`` and is immutable
once built.  Interactive widgets subclass ``MutView`` instead; they receive
their focus flag when drawn and get key events, and they must be wrapped in
a ``ViewCell`` (through ``ViewRegistry.register``) to take part in a view
tree.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

from termdom.layout import (
    Constraint,
    Direction,
    Fill,
    Length,
    Rect,
    Size,
    equal_constraints,
    split,
)
from termdom.style import Color, Style
from termdom.utils import graphemes, truncate_to_width, visible_width, wrap_text

if TYPE_CHECKING:
    from termdom.frame import Frame
    from termdom.keys import KeyEvent

__all__ = [
    "Alignment",
    "Block",
    "Empty",
    "MutView",
    "Paragraph",
    "SizedView",
    "Span",
    "Stack",
    "View",
    "prefers_size",
]

# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class View(Protocol):
    """Anything that can draw itself into an area of a frame.

    ``preferred_size`` is optional -- containers look it up with
    ``getattr`` and treat a missing method like one returning ``None``.
    """

    def render(self, frame: Frame, area: Rect) -> None: ...


def preferred_size_of(view: object) -> Size | None:
    getter = getattr(view, "preferred_size", None)
    if getter is None:
        return None
    return getter()


class MutView:
    """Base class for interactive widgets.

    Every hook has a do-nothing default; widgets override what they need.
    """

    def render(self, frame: Frame, area: Rect, is_focused: bool) -> None:
        raise NotImplementedError

    def preferred_size(self) -> Size | None:
        return None

    def is_focusable(self) -> bool:
        return False

    def on_focus(self) -> None:
        pass

    def on_unfocus(self) -> None:
        pass

    def on_key_event(self, event: KeyEvent) -> None:
        pass

    def on_paste(self, text: str) -> None:
        pass


# ---------------------------------------------------------------------------
# Simple views
# ---------------------------------------------------------------------------


class Empty:
    """Draws nothing."""

    def render(self, frame: Frame, area: Rect) -> None:
        pass

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Empty)

    def __hash__(self) -> int:
        return hash(Empty)


@dataclass(frozen=True)
class SizedView:
    """Wraps a view and overrides its preferred size."""

    size: Size
    inner: View

    def render(self, frame: Frame, area: Rect) -> None:
        self.inner.render(frame, area)

    def preferred_size(self) -> Size | None:
        return self.size


def prefers_size(view: View, size: Size | tuple[int, int]) -> SizedView:
    """Attach a preferred ``(width, height)`` to *view*.

    A zero in either dimension means "no preference" on that axis.
    """
    if isinstance(size, tuple):
        size = Size(*size)
    return SizedView(size, view)


class Alignment(enum.Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


# Box-drawing characters: (top-left, top-right, bottom-left, bottom-right,
# horizontal, vertical)
_BORDER_PLAIN = ("┌", "┐", "└", "┘", "─", "│")


@dataclass(frozen=True)
class Block:
    """A bordered box with an optional title in the top border."""

    title: str = ""
    borders: bool = True
    style: Style = Style()
    border_style: Style = Style()

    def with_title(self, title: str) -> Block:
        return replace(self, title=title)

    def with_style(self, style: Style) -> Block:
        return replace(self, style=style)

    def with_border_style(self, style: Style) -> Block:
        return replace(self, border_style=style)

    def inner(self, area: Rect) -> Rect:
        """The area left for content once the borders are drawn."""
        return area.inner(1) if self.borders else area

    def render(self, frame: Frame, area: Rect) -> None:
        frame.fill(area, self.style)
        if not self.borders or area.width < 2 or area.height < 2:
            return
        tl, tr, bl, br, h, v = _BORDER_PLAIN
        style = self.style.patch(self.border_style)
        middle = h * (area.width - 2)
        frame.set_string(area.x, area.y, tl + middle + tr, style)
        for y in range(area.y + 1, area.bottom - 1):
            frame.set_string(area.x, y, v, style)
            frame.set_string(area.right - 1, y, v, style)
        frame.set_string(area.x, area.bottom - 1, bl + middle + br, style)
        if self.title:
            title = truncate_to_width(self.title, area.width - 2)
            frame.set_string(area.x + 1, area.y, title, style)


# ---------------------------------------------------------------------------
# Paragraph
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Span:
    """A run of text drawn with one style."""

    text: str
    style: Style = Style()


@dataclass(frozen=True)
class Paragraph:
    """Static text, optionally styled, wrapped, aligned and boxed.

    ``spans`` lets a paragraph mix styles on a single line; plain ``text``
    is drawn line by line.
    """

    text: str = ""
    style: Style = Style()
    wrap: bool = False
    trim: bool = True
    alignment: Alignment = Alignment.LEFT
    block: Block | None = None
    spans: tuple[Span, ...] = field(default=())

    @classmethod
    def from_spans(cls, spans: Sequence[Span], style: Style = Style()) -> Paragraph:
        return cls(spans=tuple(spans), style=style)

    def with_style(self, style: Style) -> Paragraph:
        return replace(self, style=style)

    def fg(self, color: Color) -> Paragraph:
        return replace(self, style=self.style.with_fg(color))

    def bg(self, color: Color) -> Paragraph:
        return replace(self, style=self.style.with_bg(color))

    def wrapped(self, trim: bool = True) -> Paragraph:
        return replace(self, wrap=True, trim=trim)

    def aligned(self, alignment: Alignment) -> Paragraph:
        return replace(self, alignment=alignment)

    def boxed(self, block: Block) -> Paragraph:
        return replace(self, block=block)

    def render(self, frame: Frame, area: Rect) -> None:
        frame.fill(area, self.style)
        if self.block is not None:
            self.block.render(frame, area)
            area = self.block.inner(area)
        if area.is_empty():
            return
        if self.spans:
            self._render_spans(frame, area)
            return

        if self.wrap:
            lines = wrap_text(self.text, area.width, trim=self.trim)
        else:
            lines = self.text.split("\n")
        for offset, line in enumerate(lines[: area.height]):
            x = area.x + self._indent(visible_width(line), area.width)
            frame.set_string(x, area.y + offset, line, self.style, max_width=area.right - x)

    def _render_spans(self, frame: Frame, area: Rect) -> None:
        width = sum(visible_width(span.text) for span in self.spans)
        x = area.x + self._indent(width, area.width)
        y = area.y
        for span in self.spans:
            style = self.style.patch(span.style)
            if not self.wrap:
                x = frame.set_string(x, y, span.text, style, max_width=max(0, area.right - x))
                continue
            for g in graphemes(span.text):
                if g == "\n" or visible_width(g) + x > area.right:
                    x, y = area.x, y + 1
                    if y >= area.bottom:
                        return
                    if g == "\n":
                        continue
                x = frame.set_string(x, y, g, style, max_width=area.right - x)

    def _indent(self, line_width: int, area_width: int) -> int:
        if self.alignment is Alignment.CENTER:
            return max(0, (area_width - line_width) // 2)
        if self.alignment is Alignment.RIGHT:
            return max(0, area_width - line_width)
        return 0


# ---------------------------------------------------------------------------
# Stack
# ---------------------------------------------------------------------------


class Stack:
    """Children laid out side by side (horizontal) or top to bottom.

    Unless explicit constraints are given, a child with a preferred size
    gets exactly that length along the stack axis and the others share
    the rest equally.  Across the axis a child is clamped to its preferred
    size when it has one.  Zero means no preference on that axis.
    """

    def __init__(
        self,
        direction: Direction,
        children: Sequence[View],
        constraints: Sequence[Constraint] | None = None,
    ) -> None:
        self.direction = direction
        self.children: list[View] = list(children)
        if constraints is None:
            constraints = [self._constraint_for(child) for child in self.children]
        elif len(constraints) != len(self.children):
            raise ValueError(
                f"{len(constraints)} constraints for {len(self.children)} children"
            )
        self.constraints: list[Constraint] = list(constraints)

    @classmethod
    def horizontal(cls, children: Sequence[View]) -> Stack:
        return cls(Direction.HORIZONTAL, children)

    @classmethod
    def vertical(cls, children: Sequence[View]) -> Stack:
        return cls(Direction.VERTICAL, children)

    @classmethod
    def equal_split(cls, direction: Direction, children: Sequence[View]) -> Stack:
        return cls(direction, children, equal_constraints(len(children)))

    def _constraint_for(self, child: View) -> Constraint:
        size = preferred_size_of(child)
        if size is None:
            return Fill(1)
        length = size.width if self.direction is Direction.HORIZONTAL else size.height
        return Length(length) if length else Fill(1)

    def render(self, frame: Frame, area: Rect) -> None:
        chunks = split(area, self.direction, self.constraints)
        for chunk, child in zip(chunks, self.children):
            size = preferred_size_of(child)
            if size is not None:
                if self.direction is Direction.HORIZONTAL and size.height:
                    chunk = replace(chunk, height=min(size.height, chunk.height))
                elif self.direction is Direction.VERTICAL and size.width:
                    chunk = replace(chunk, width=min(size.width, chunk.width))
            child.render(frame, chunk)
