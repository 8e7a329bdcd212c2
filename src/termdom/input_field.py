"""InputField - single-line text field with caret, selection and placeholder."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from termdom.clipboard import Clipboard, ClipboardError
from termdom.content import Caret, TextContent
from termdom.keybindings import Action, get_keybindings
from termdom.navigator import next_boundary
from termdom.style import Color, Style
from termdom.views import Block, MutView, Paragraph, Span

if TYPE_CHECKING:
    from termdom.frame import Frame
    from termdom.keys import KeyEvent
    from termdom.layout import Rect, Size

__all__ = ["InputField"]

logger = logging.getLogger(__name__)

CARET_STYLE = Style(fg=Color.BLACK, bg=Color.WHITE)

_EDIT_ACTIONS: tuple[Action, ...] = (
    "selectLeftEnd",
    "selectRightEnd",
    "selectLeft",
    "selectRight",
    "caretLeftEnd",
    "caretRightEnd",
    "caretLeft",
    "caretRight",
    "deleteBackward",
    "deleteForward",
    "copy",
    "paste",
)


class InputField(MutView):
    """Focusable single-line text field.

    Configure with keyword arguments or the chaining helpers::

        field = InputField(placeholder="Name").with_text("Ada").caret_at_end()
    """

    def __init__(
        self,
        placeholder: str = "",
        text: str = "",
        *,
        style_focused: Style = Style(fg=Color.WHITE),
        style_unfocused: Style = Style(fg=Color.WHITE),
        style_placeholder: Style = Style(fg=Color.DARK_GRAY),
        style_selection: Style = Style(fg=Color.BLACK, bg=Color.LIGHT_BLUE),
        block_focused: Block | None = None,
        block_unfocused: Block | None = None,
        clipboard: Clipboard | None = None,
        preferred_size: Size | None = None,
    ) -> None:
        self.placeholder = placeholder
        self.style_focused = style_focused
        self.style_unfocused = style_unfocused
        self.style_placeholder = style_placeholder
        self.style_selection = style_selection
        self.block_focused = block_focused
        self.block_unfocused = block_unfocused
        self.clipboard = clipboard
        self._preferred_size = preferred_size
        self._content = TextContent(text)

    # ------------------------------------------------------------------
    # Builder helpers
    # ------------------------------------------------------------------

    def with_text(self, text: str) -> InputField:
        self._content.set_text(text)
        return self

    def caret_at_end(self) -> InputField:
        self._content.cursor_to_end()
        return self

    def caret_at_beginning(self) -> InputField:
        self._content.cursor_to_beginning()
        return self

    def with_blocks(self, focused: Block | None, unfocused: Block | None = None) -> InputField:
        self.block_focused = focused
        self.block_unfocused = focused if unfocused is None else unfocused
        return self

    @property
    def content(self) -> TextContent:
        return self._content

    @property
    def text(self) -> str:
        return self._content.text

    # ------------------------------------------------------------------
    # MutView
    # ------------------------------------------------------------------

    def is_focusable(self) -> bool:
        return True

    def preferred_size(self) -> Size | None:
        return self._preferred_size

    def render(self, frame: Frame, area: Rect, is_focused: bool) -> None:
        block = self.block_focused if is_focused else self.block_unfocused
        paragraph = replace(self._paragraph(is_focused), wrap=True, trim=False, block=block)
        paragraph.render(frame, area)

    def _paragraph(self, is_focused: bool) -> Paragraph:
        if not self._content.byte_len:
            return self._placeholder_paragraph(is_focused)
        if not is_focused:
            return Paragraph(self._content.text, style=self.style_unfocused)

        raw = self._content.text.encode("utf-8")
        cursor = self._content.cursor()
        if isinstance(cursor, Caret):
            if self._content.caret_is_at_end():
                return Paragraph.from_spans([
                    Span(raw.decode("utf-8"), self.style_focused),
                    Span(" ", CARET_STYLE),
                ])
            after = next_boundary(raw, cursor.pos)
            spans = [
                Span(raw[:cursor.pos].decode("utf-8"), self.style_focused),
                Span(raw[cursor.pos:after].decode("utf-8"), CARET_STYLE),
                Span(raw[after:].decode("utf-8"), self.style_focused),
            ]
        else:
            spans = [
                Span(raw[:cursor.start].decode("utf-8"), self.style_focused),
                Span(raw[cursor.start:cursor.end].decode("utf-8"), self.style_selection),
                Span(raw[cursor.end:].decode("utf-8"), self.style_focused),
            ]
        return Paragraph.from_spans([s for s in spans if s.text])

    def _placeholder_paragraph(self, is_focused: bool) -> Paragraph:
        if not is_focused:
            return Paragraph.from_spans([Span(self.placeholder, self.style_placeholder)])
        # The caret sits on the first placeholder character.
        head, tail = self.placeholder[:1] or " ", self.placeholder[1:]
        return Paragraph.from_spans([
            Span(head, CARET_STYLE.patch(self.style_placeholder)),
            Span(tail, self.style_placeholder),
        ])

    def on_key_event(self, event: KeyEvent) -> None:
        action = get_keybindings().action_for(event, _EDIT_ACTIONS)
        if action is not None:
            self._run(action)
            return
        if not event.is_char or event.ctrl or event.alt:
            return
        if event.shift:
            # Uppercasing may yield more than one character ("ß" -> "SS").
            for ch in event.key.upper():
                self._content.insert(ch)
        else:
            self._content.insert(event.key)

    def on_paste(self, text: str) -> None:
        clean = text.replace("\r\n", "").replace("\r", "").replace("\n", "")
        self._content.batch_insert(clean)

    def _run(self, action: Action) -> None:
        content = self._content
        if action == "caretLeft":
            content.caret_left()
        elif action == "caretRight":
            content.caret_right()
        elif action == "caretLeftEnd":
            content.caret_left_end()
        elif action == "caretRightEnd":
            content.caret_right_end()
        elif action == "selectLeft":
            content.select_left()
        elif action == "selectRight":
            content.select_right()
        elif action == "selectLeftEnd":
            content.select_left_end()
        elif action == "selectRightEnd":
            content.select_right_end()
        elif action == "deleteBackward":
            content.delete_backward()
        elif action == "deleteForward":
            content.delete_forward()
        elif action == "copy":
            if self.clipboard is None:
                return
            try:
                content.copy(self.clipboard)
            except ClipboardError:
                logger.warning("Copy to clipboard failed", exc_info=True)
        elif action == "paste":
            if self.clipboard is not None:
                content.paste(self.clipboard)
