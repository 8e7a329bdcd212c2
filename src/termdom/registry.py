"""Focus ring and tag index over the interactive widgets of a screen.

The registry never owns cells.  It keeps weak handles in registration
order (which is also the tab order) and by tag, so widgets dropped from
the view tree fall out of focus traversal and lookups on their own.
"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from termdom.cell import ViewCell, ViewCellRef
from termdom.keybindings import get_keybindings
from termdom.keys import Event, KeyEvent
from termdom.views import MutView

__all__ = ["ViewRegistry"]

logger = logging.getLogger(__name__)

V = TypeVar("V", bound=MutView)
T = TypeVar("T")


class ViewRegistry:
    """Ordered focus ring plus ``tag -> cells`` map of weak handles.

    At most one live cell is focused at a time.  Focus only changes through
    ``build``, ``focus_next`` and ``focus_prev``, and every change fires
    ``on_unfocus`` on the cell losing focus and ``on_focus`` on the cell
    gaining it.
    """

    def __init__(self) -> None:
        self._ring: list[ViewCellRef] = []
        self._tags: dict[str, list[ViewCellRef]] = {}

    def __len__(self) -> int:
        """Number of registered handles, dead ones included."""
        return len(self._ring)

    def __repr__(self) -> str:
        return f"ViewRegistry(registered={len(self._ring)}, live={self.live_count()})"

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, view: MutView) -> ViewCell:
        """Wrap *view* in an unfocused cell and append it to the ring.

        The caller must keep the returned cell alive (normally by putting
        it into the view tree).
        """
        cell = ViewCell(view)
        self._ring.append(cell.downgrade())
        return cell

    def register_tagged(self, tag: str, view: MutView) -> ViewCell:
        """Like ``register``, and also index the cell under *tag*."""
        cell = self.register(view)
        self._tags.setdefault(tag, []).append(self._ring[-1])
        return cell

    def build(self) -> ViewRegistry:
        """Give focus to the first live focusable cell, if nothing has it yet."""
        if self.focused() is None:
            for ref in self._ring:
                cell = ref.resolve()
                if cell is not None and cell.is_focusable():
                    self._enter(cell)
                    break
        return self

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------

    def focused(self) -> ViewCell | None:
        index = self._focused_index()
        return None if index is None else self._ring[index].resolve()

    def focus_next(self) -> None:
        self._move_focus(1)

    def focus_prev(self) -> None:
        self._move_focus(-1)

    def _focused_index(self) -> int | None:
        for i, ref in enumerate(self._ring):
            cell = ref.resolve()
            if cell is not None and cell.is_focused:
                return i
        return None

    def _move_focus(self, step: int) -> None:
        count = len(self._ring)
        if count == 0:
            return

        current = self._focused_index()
        if current is not None:
            # Keep a strong reference until the hook has run.
            leaving = self._ring[current].resolve()
            if leaving is not None:
                self._leave(leaving)
            start = (current + step) % count
        else:
            start = 0 if step > 0 else count - 1

        for offset in range(count):
            cell = self._ring[(start + offset * step) % count].resolve()
            if cell is not None and cell.is_focusable():
                self._enter(cell)
                return
        logger.debug("no focusable view to move focus to")

    @staticmethod
    def _enter(cell: ViewCell) -> None:
        logger.debug("focus -> %r", cell)
        cell._focus()

    @staticmethod
    def _leave(cell: ViewCell) -> None:
        logger.debug("unfocus <- %r", cell)
        cell._unfocus()

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def lookup_by_tag(self, tag: str) -> ViewCell | None:
        """The earliest registered live cell under *tag*."""
        for ref in self._tags.get(tag, ()):
            cell = ref.resolve()
            if cell is not None:
                return cell
        return None

    def inspect_tagged(self, tag: str, view_type: type[V], fn: Callable[[V], T]) -> T | None:
        """``lookup_by_tag(tag).inspect(view_type, fn)``, or ``None`` if no cell."""
        cell = self.lookup_by_tag(tag)
        if cell is None:
            return None
        return cell.inspect(view_type, fn)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def dispatch_key(self, event: Event) -> None:
        """Cycle focus on Tab / Shift+Tab, otherwise hand the key to the focused cell.

        Non-key events and key releases are ignored.
        """
        if not isinstance(event, KeyEvent) or event.kind == "release":
            return
        kb = get_keybindings()
        if kb.matches(event, "focusNext"):
            self.focus_next()
        elif kb.matches(event, "focusPrev"):
            self.focus_prev()
        else:
            cell = self.focused()
            if cell is not None:
                cell.key_event(event)

    def dispatch_paste(self, text: str) -> None:
        """Hand pasted text to the focused cell, if any."""
        cell = self.focused()
        if cell is not None:
            cell.paste(text)

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    def live_count(self) -> int:
        return sum(1 for ref in self._ring if ref.is_alive())

    def prune(self) -> int:
        """Drop dead handles, keeping the order of live ones; return how many went."""
        before = len(self._ring)
        self._ring = [ref for ref in self._ring if ref.is_alive()]
        for tag in list(self._tags):
            alive = [ref for ref in self._tags[tag] if ref.is_alive()]
            if alive:
                self._tags[tag] = alive
            else:
                del self._tags[tag]
        removed = before - len(self._ring)
        if removed:
            logger.debug("pruned %d dead view handles", removed)
        return removed
