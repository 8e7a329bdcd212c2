"""Type-erased, lock-guarded container for one interactive widget.

The view tree owns ``ViewCell`` objects; the registry only keeps
``ViewCellRef`` handles, so a cell dropped from the tree simply stops
resolving.
"""

from __future__ import annotations

import threading
import weakref
from typing import TYPE_CHECKING, Callable, TypeVar

from termdom.errors import TermdomError
from termdom.views import MutView

if TYPE_CHECKING:
    from termdom.frame import Frame
    from termdom.keys import KeyEvent
    from termdom.layout import Rect, Size

__all__ = ["ViewCell", "ViewCellRef", "ViewTypeMismatch"]

V = TypeVar("V", bound=MutView)
T = TypeVar("T")


class ViewTypeMismatch(TermdomError, TypeError):
    """``inspect`` was asked for a widget type the cell does not hold."""

    def __init__(self, expected: type, actual: type) -> None:
        super().__init__(
            f"cell holds {actual.__qualname__}, not {expected.__qualname__}"
        )
        self.expected = expected
        self.actual = actual


class ViewCell:
    """A ``MutView`` plus its focus flag, usable anywhere a ``View`` is.

    All access to the widget goes through the cell's lock.  The lock is not
    re-entrant: a widget hook must not call back into its own cell or into
    the registry that drives it.
    """

    __slots__ = ("_view", "_is_focused", "_lock", "__weakref__")

    def __init__(self, view: MutView) -> None:
        self._view = view
        self._is_focused = False
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"ViewCell({type(self._view).__name__}, focused={self._is_focused})"

    @property
    def view_type(self) -> type:
        return type(self._view)

    @property
    def is_focused(self) -> bool:
        with self._lock:
            return self._is_focused

    def downgrade(self) -> ViewCellRef:
        return ViewCellRef(self)

    # ------------------------------------------------------------------
    # View protocol
    # ------------------------------------------------------------------

    def render(self, frame: Frame, area: Rect) -> None:
        with self._lock:
            self._view.render(frame, area, self._is_focused)

    def preferred_size(self) -> Size | None:
        with self._lock:
            return self._view.preferred_size()

    # ------------------------------------------------------------------
    # Checked access
    # ------------------------------------------------------------------

    def inspect(self, view_type: type[V], fn: Callable[[V], T]) -> T:
        """Run ``fn(widget)`` under the lock if the widget is a *view_type*.

        Raises ``ViewTypeMismatch`` otherwise.
        """
        if not isinstance(self._view, view_type):
            raise ViewTypeMismatch(view_type, type(self._view))
        with self._lock:
            return fn(self._view)

    # ------------------------------------------------------------------
    # Driven by the registry
    # ------------------------------------------------------------------

    # ``_focus`` and ``_unfocus`` are only called by ``ViewRegistry``, which
    # keeps at most one cell focused.

    def is_focusable(self) -> bool:
        with self._lock:
            return self._view.is_focusable()

    def _focus(self) -> None:
        with self._lock:
            self._is_focused = True
            self._view.on_focus()

    def _unfocus(self) -> None:
        with self._lock:
            self._is_focused = False
            self._view.on_unfocus()

    def key_event(self, event: KeyEvent) -> None:
        with self._lock:
            self._view.on_key_event(event)

    def paste(self, text: str) -> None:
        with self._lock:
            self._view.on_paste(text)


class ViewCellRef:
    """Weak observation handle for a ``ViewCell``."""

    __slots__ = ("_ref",)

    def __init__(self, cell: ViewCell) -> None:
        self._ref = weakref.ref(cell)

    def resolve(self) -> ViewCell | None:
        """The cell, or ``None`` once the view tree has dropped it."""
        return self._ref()

    def is_alive(self) -> bool:
        return self._ref() is not None

    def __repr__(self) -> str:
        cell = self._ref()
        return f"ViewCellRef({cell!r})" if cell is not None else "ViewCellRef(<dead>)"
