"""Cell grid that views draw into, serialised to ANSI lines for output."""

from __future__ import annotations

from dataclasses import dataclass

from termdom.layout import Rect
from termdom.style import Style
from termdom.utils import grapheme_width, graphemes

__all__ = ["Cell", "Frame"]

_SGR_RESET = "\x1b[0m"


@dataclass
class Cell:
    """One terminal cell.

    The right half of a wide character holds an empty ``symbol``.
    """

    symbol: str = " "
    style: Style = Style()


class Frame:
    """A fixed-size grid of cells covering the whole terminal."""

    def __init__(self, width: int, height: int) -> None:
        self.area = Rect(0, 0, width, height)
        self._cells: list[list[Cell]] = [
            [Cell() for _ in range(width)] for _ in range(height)
        ]

    @property
    def width(self) -> int:
        return self.area.width

    @property
    def height(self) -> int:
        return self.area.height

    def cell(self, x: int, y: int) -> Cell:
        return self._cells[y][x]

    def fill(self, rect: Rect, style: Style) -> None:
        """Apply *style* to every cell of *rect* (clipped to the frame)."""
        clipped = rect.intersection(self.area)
        for y in range(clipped.y, clipped.bottom):
            row = self._cells[y]
            for x in range(clipped.x, clipped.right):
                row[x].style = row[x].style.patch(style)

    def set_string(
        self,
        x: int,
        y: int,
        text: str,
        style: Style = Style(),
        max_width: int | None = None,
    ) -> int:
        """Write *text* starting at ``(x, y)``; return the column after it.

        Writing stops at *max_width* columns, at the frame edge, or before
        a wide character that would not fit.  Control characters are
        skipped.
        """
        if not 0 <= y < self.height:
            return x
        limit = self.width if max_width is None else min(self.width, x + max_width)
        row = self._cells[y]
        col = x
        for g in graphemes(text):
            w = grapheme_width(g)
            if w == 0:
                continue
            if col + w > limit:
                break
            if col >= 0:
                self._put(row, col, g, style)
                for extra in range(1, w):
                    self._put(row, col + extra, "", style)
            col += w
        return col

    def _put(self, row: list[Cell], col: int, symbol: str, style: Style) -> None:
        # Overwriting half of a wide character blanks the other half.
        target = row[col]
        if target.symbol == "" and symbol != "" and col > 0:
            row[col - 1].symbol = " "
        elif grapheme_width(target.symbol) > 1 and col + 1 < len(row):
            row[col + 1].symbol = " "
        target.symbol = symbol
        target.style = target.style.patch(style)

    def plain_lines(self) -> list[str]:
        """Rows as text only, for tests and debugging."""
        return ["".join(c.symbol for c in row) for row in self._cells]

    def to_lines(self) -> list[str]:
        """Rows as ANSI strings, each ending with a style reset."""
        lines: list[str] = []
        for row in self._cells:
            parts: list[str] = []
            current: Style | None = None
            for c in row:
                if c.symbol == "":
                    continue
                if c.style != current:
                    parts.append(_SGR_RESET + c.style.sgr())
                    current = c.style
                parts.append(c.symbol)
            parts.append(_SGR_RESET)
            lines.append("".join(parts))
        return lines
