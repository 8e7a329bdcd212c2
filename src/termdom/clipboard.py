"""Clipboard providers used by text fields for copy and paste."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import pyperclip

from termdom.errors import TermdomError

__all__ = [
    "Clipboard",
    "ClipboardError",
    "MemoryClipboard",
    "SystemClipboard",
]

logger = logging.getLogger(__name__)


class ClipboardError(TermdomError):
    """The clipboard provider failed to read or write."""


@runtime_checkable
class Clipboard(Protocol):
    """Anything that can get and set clipboard text.

    ``get_text`` returns ``None`` when the clipboard holds no text.  Both
    methods raise ``ClipboardError`` when the provider itself fails.
    """

    def get_text(self) -> str | None: ...

    def set_text(self, text: str) -> None: ...


class SystemClipboard:
    """OS clipboard backed by :mod:`pyperclip`."""

    def get_text(self) -> str | None:
        try:
            content = pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(str(exc)) from exc
        if not isinstance(content, str):
            return None
        return content

    def set_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(str(exc)) from exc
        logger.debug("Copied %d characters to the system clipboard", len(text))


class MemoryClipboard:
    """Process-local clipboard, for headless sessions and tests."""

    def __init__(self, text: str | None = None) -> None:
        self._text = text

    def get_text(self) -> str | None:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
