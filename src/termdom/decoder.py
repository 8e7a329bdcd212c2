"""Turn raw stdin text into complete sequences and events.

Terminal input arrives in arbitrary chunks, so an escape sequence can be
split across reads.  ``InputDecoder`` holds an incomplete sequence until
more data arrives or the caller flushes it after the poll timeout, at which
point a lone ``ESC`` becomes an Escape key press.
"""

from __future__ import annotations

import logging
import re

from termdom.keys import Event, PasteEvent, parse_key_event

__all__ = ["InputDecoder", "split_sequences"]

logger = logging.getLogger(__name__)

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")


def _sequence_status(data: str) -> str:
    """Return ``"complete"`` or ``"incomplete"`` for an ESC-led sequence."""
    if len(data) == 1:
        return "incomplete"

    intro = data[1]
    if intro == "[":
        if data.startswith("\x1b[M"):
            # X10 mouse: ESC [ M b x y
            return "complete" if len(data) >= 6 else "incomplete"
        if len(data) < 3:
            return "incomplete"
        payload = data[2:]
        if not 0x40 <= ord(payload[-1]) <= 0x7E:
            return "incomplete"
        if payload.startswith("<") and not _SGR_MOUSE_RE.match(payload):
            return "incomplete"
        return "complete"

    if intro in "]P_":
        # OSC / DCS / APC end with ST, OSC may also end with BEL
        if data.endswith("\x1b\\") or (intro == "]" and data.endswith("\x07")):
            return "complete"
        return "incomplete"

    if intro == "O":
        return "complete" if len(data) >= 3 else "incomplete"

    return "complete"


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences plus an incomplete remainder."""
    sequences: list[str] = []
    pos = 0
    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue
        end = pos + 1
        while True:
            if end > len(buffer):
                return sequences, buffer[pos:]
            if _sequence_status(buffer[pos:end]) == "complete":
                break
            end += 1
        sequences.append(buffer[pos:end])
        pos = end
    return sequences, ""


class InputDecoder:
    """Accumulates stdin chunks and yields decoded events."""

    def __init__(self) -> None:
        self._buffer: str = ""
        self._paste_buffer: str | None = None

    @property
    def pending(self) -> str:
        """Bytes held back waiting for the rest of a sequence."""
        return self._buffer

    def feed(self, data: str) -> list[Event]:
        events: list[Event] = []
        self._buffer += data

        while self._buffer:
            if self._paste_buffer is not None:
                self._paste_buffer += self._buffer
                self._buffer = ""
                end = self._paste_buffer.find(BRACKETED_PASTE_END)
                if end == -1:
                    break
                events.append(PasteEvent(self._paste_buffer[:end]))
                self._buffer = self._paste_buffer[end + len(BRACKETED_PASTE_END):]
                self._paste_buffer = None
                continue

            start = self._buffer.find(BRACKETED_PASTE_START)
            head = self._buffer if start == -1 else self._buffer[:start]
            sequences, remainder = split_sequences(head)
            events.extend(self._decode_all(sequences))
            if start == -1:
                self._buffer = remainder
                break
            self._paste_buffer = ""
            self._buffer = self._buffer[start + len(BRACKETED_PASTE_START):]

        return events

    def flush(self) -> list[Event]:
        """Decode whatever is held back, treating it as complete."""
        if not self._buffer:
            return []
        held, self._buffer = self._buffer, ""
        return self._decode_all([held])

    def reset(self) -> None:
        self._buffer = ""
        self._paste_buffer = None

    @staticmethod
    def _decode_all(sequences: list[str]) -> list[Event]:
        events: list[Event] = []
        for sequence in sequences:
            event = parse_key_event(sequence)
            if event is None:
                logger.debug("Ignoring unrecognised input %r", sequence)
                continue
            events.append(event)
        return events
