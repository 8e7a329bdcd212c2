"""Single-line text editing model: buffer, caret and selection.

Positions are byte offsets into the UTF-8 encoding of the text and always sit
on codepoint boundaries.  When ``caret2`` is set the content is in selection
mode and the selected span is ``[min(caret, caret2), max(caret, caret2))``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from termdom.clipboard import Clipboard, ClipboardError
from termdom.navigator import next_boundary, prev_boundary

__all__ = ["Caret", "Cursor", "Selection", "TextContent"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Caret:
    """No selection; the caret sits at ``pos``."""

    pos: int


@dataclass(frozen=True)
class Selection:
    """Selected byte span, already normalised so ``start <= end``."""

    start: int
    end: int


Cursor = Union[Caret, Selection]


def _ordered(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a <= b else (b, a)


class TextContent:
    """Editable UTF-8 text with a caret and an optional selection anchor."""

    def __init__(self, text: str = "") -> None:
        self._buf = bytearray(text.encode("utf-8"))
        self._caret: int = 0
        self._caret2: int | None = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._buf.decode("utf-8")

    @property
    def byte_len(self) -> int:
        return len(self._buf)

    @property
    def caret(self) -> int:
        return self._caret

    @property
    def caret2(self) -> int | None:
        return self._caret2

    def cursor(self) -> Cursor:
        if self._caret2 is None:
            return Caret(self._caret)
        return Selection(*_ordered(self._caret, self._caret2))

    def is_in_selection_mode(self) -> bool:
        return self._caret2 is not None

    def caret_is_at_end(self) -> bool:
        return self._caret == len(self._buf)

    def selected_text(self) -> str:
        """The selected substring, or ``""`` outside selection mode."""
        if self._caret2 is None:
            return ""
        start, end = _ordered(self._caret, self._caret2)
        return self._buf[start:end].decode("utf-8")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextContent):
            return NotImplemented
        return (
            self._buf == other._buf
            and self._caret == other._caret
            and self._caret2 == other._caret2
        )

    def __repr__(self) -> str:
        return (
            f"TextContent(text={self.text!r}, caret={self._caret}, "
            f"caret2={self._caret2})"
        )

    # ------------------------------------------------------------------
    # Whole-buffer operations
    # ------------------------------------------------------------------

    def cursor_to_beginning(self) -> None:
        self._caret = 0
        self._caret2 = None

    def cursor_to_end(self) -> None:
        self._caret = len(self._buf)
        self._caret2 = None

    def clear(self) -> None:
        self.cursor_to_beginning()
        self._buf = bytearray()

    def set_text(self, text: str) -> str:
        """Replace the buffer and return the previous text.

        The caret moves to the beginning.
        """
        old = self.text
        self.cursor_to_beginning()
        self._buf = bytearray(text.encode("utf-8"))
        return old

    def take_text(self) -> str:
        """Return the text and leave the buffer empty."""
        old = self.text
        self.clear()
        return old

    # ------------------------------------------------------------------
    # Insertion / deletion
    # ------------------------------------------------------------------

    def insert(self, char: str) -> None:
        if len(char) != 1:
            raise ValueError(f"insert() takes a single character, got {char!r}")
        if self._caret2 is not None:
            self._delete_selection()
        self._buf[self._caret:self._caret] = char.encode("utf-8")
        self._caret = next_boundary(self._buf, self._caret)

    def batch_insert(self, text: str) -> None:
        if self._caret2 is not None:
            self._delete_selection()
        encoded = text.encode("utf-8")
        self._buf[self._caret:self._caret] = encoded
        self._caret += len(encoded)

    def delete_backward(self) -> None:
        if self._caret2 is not None:
            self._delete_selection()
            return
        start = prev_boundary(self._buf, self._caret)
        del self._buf[start:self._caret]
        self._caret = start

    def delete_forward(self) -> None:
        if self._caret2 is not None:
            self._delete_selection()
            return
        end = next_boundary(self._buf, self._caret)
        del self._buf[self._caret:end]

    def _delete_selection(self) -> None:
        assert self._caret2 is not None
        start, end = _ordered(self._caret, self._caret2)
        del self._buf[start:end]
        self._caret = start
        self._caret2 = None

    # ------------------------------------------------------------------
    # Caret movement
    # ------------------------------------------------------------------

    def caret_left(self) -> None:
        # Collapses to the selection start and then still steps once.
        if self._caret2 is not None:
            self._caret = min(self._caret, self._caret2)
            self._caret2 = None
        self._caret = prev_boundary(self._buf, self._caret)

    def caret_right(self) -> None:
        if self._caret2 is not None:
            self._caret = max(self._caret, self._caret2)
            self._caret2 = None
        self._caret = next_boundary(self._buf, self._caret)

    def caret_left_end(self) -> None:
        self.cursor_to_beginning()

    def caret_right_end(self) -> None:
        self.cursor_to_end()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_left(self) -> None:
        """Extend the selection one codepoint left (``Shift+Left``)."""
        if self._caret2 is None:
            self._caret2 = self._caret
            self._caret = prev_boundary(self._buf, self._caret)
        else:
            self._caret = prev_boundary(self._buf, self._caret)
        if self._caret == self._caret2:
            self._caret2 = None

    def select_right(self) -> None:
        """Extend the selection one codepoint right (``Shift+Right``)."""
        if self._caret2 is None:
            self._caret2 = self._caret
            self._caret = next_boundary(self._buf, self._caret)
        else:
            self._caret = next_boundary(self._buf, self._caret)
        if self._caret == self._caret2:
            self._caret2 = None

    def select_left_end(self) -> None:
        self._caret2 = 0
        if self._caret == 0:
            self._caret2 = None

    def select_right_end(self) -> None:
        self._caret2 = len(self._buf)
        if self._caret == len(self._buf):
            self._caret2 = None

    # ------------------------------------------------------------------
    # Clipboard
    # ------------------------------------------------------------------

    def copy(self, clipboard: Clipboard) -> None:
        """Copy the selection to *clipboard*.

        No-op outside selection mode.  Provider failures propagate as
        ``ClipboardError``.
        """
        if self._caret2 is None:
            return
        clipboard.set_text(self.selected_text())

    def paste(self, clipboard: Clipboard) -> None:
        """Insert clipboard text at the caret, replacing any selection.

        Provider failures and non-text content leave the content untouched.
        """
        try:
            pasted = clipboard.get_text()
        except ClipboardError:
            logger.debug("Clipboard read failed; paste ignored", exc_info=True)
            return
        if pasted is None:
            return
        self.batch_insert(pasted)
