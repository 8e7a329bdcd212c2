"""Screen: a view tree, its registry, and differential output to a terminal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from termdom.frame import Frame
from termdom.keys import Event, KeyEvent, PasteEvent, ResizeEvent
from termdom.registry import ViewRegistry

if TYPE_CHECKING:
    from termdom.terminal import Terminal
    from termdom.views import View

__all__ = ["Screen"]

logger = logging.getLogger(__name__)

_CLEAR_TO_EOL = "\x1b[K"
_MOVE_TO_FMT = "\x1b[{};1H"


class Screen:
    """Owns the root view and routes events through the registry.

    The root view tree holds the strong references to every ``ViewCell``;
    the registry only observes them.
    """

    def __init__(self, root: View, registry: ViewRegistry | None = None) -> None:
        self.root = root
        self.registry = registry if registry is not None else ViewRegistry()
        self.registry.build()

        # Previous render state (for differential updates)
        self._previous_lines: list[str] = []
        self._previous_size: tuple[int, int] = (0, 0)
        self._full_redraw_count: int = 0

    @property
    def full_redraws(self) -> int:
        return self._full_redraw_count

    def invalidate(self) -> None:
        """Forget the previous frame so the next render repaints everything."""
        self._previous_lines = []
        self._previous_size = (0, 0)

    def draw(self, width: int, height: int) -> Frame:
        """Render the view tree into a fresh frame of the given size."""
        frame = Frame(width, height)
        self.root.render(frame, frame.area)
        return frame

    def render(self, terminal: Terminal) -> int:
        """Draw the tree and write the changed lines; return how many were written."""
        width, height = terminal.columns, terminal.rows
        if width <= 0 or height <= 0:
            return 0

        lines = self.draw(width, height).to_lines()

        force_full = (width, height) != self._previous_size
        if force_full:
            self._full_redraw_count += 1

        out: list[str] = []
        written = 0
        for row, line in enumerate(lines):
            old = self._previous_lines[row] if row < len(self._previous_lines) else None
            if not force_full and line == old:
                continue
            out.append(_MOVE_TO_FMT.format(row + 1))
            out.append(line)
            out.append(_CLEAR_TO_EOL)
            written += 1

        self._previous_lines = lines
        self._previous_size = (width, height)
        if out:
            terminal.write("".join(out))
        return written

    def handle_event(self, event: Event) -> None:
        if isinstance(event, KeyEvent):
            self.registry.dispatch_key(event)
        elif isinstance(event, PasteEvent):
            self.registry.dispatch_paste(event.text)
        elif isinstance(event, ResizeEvent):
            logger.debug("Resized to %dx%d", event.columns, event.rows)
            self.invalidate()
