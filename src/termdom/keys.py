"""Keyboard events and decoding of raw terminal key sequences.

A ``KeyEvent`` names a key (``"left"``, ``"tab"``, ``"a"``, ``"é"``...) plus
its modifiers.  Key identifiers such as ``"ctrl+shift+left"`` are the string
form used by keybinding tables.

``parse_key_event`` understands legacy VT sequences, xterm modified
sequences (``CSI 1;<mod>X`` / ``CSI <n>;<mod>~``), the kitty keyboard
protocol (``CSI <cp>;<mod>u``), modifyOtherKeys (``CSI 27;<mod>;<cp>~``),
C0 control characters, ESC-prefixed Alt keys and printable characters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Optional, Union

__all__ = [
    "Event",
    "Key",
    "KeyEvent",
    "KeyEventKind",
    "KeyId",
    "PasteEvent",
    "ResizeEvent",
    "parse_key_event",
]

KeyId = str

KeyEventKind = Literal["press", "repeat", "release"]


class Key:
    """Named key constants."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# Caps lock / num lock bits reported by kitty; never part of a binding.
LOCK_MASK = 64 + 128


@dataclass(frozen=True)
class KeyEvent:
    """A key press (or repeat / release) with its modifiers.

    Single-character keys are stored as the character itself.  Letters
    that arrive with a modifier are stored lower-case; the modifier says
    whether shift was held.
    """

    key: str
    ctrl: bool = False
    shift: bool = False
    alt: bool = False
    kind: KeyEventKind = "press"

    @classmethod
    def from_id(cls, key_id: KeyId) -> KeyEvent:
        """Build an event from an identifier like ``"ctrl+shift+left"``."""
        if not key_id:
            raise ValueError("empty key id")
        parts = key_id.split("+")
        if key_id.endswith("+"):
            # The "+" key itself, e.g. "ctrl++"
            parts = parts[:-2] + ["+"]
        *mods, key = parts
        flags = {"ctrl": False, "shift": False, "alt": False}
        for mod in mods:
            lower = mod.lower()
            if not lower:
                continue
            if lower not in flags:
                raise ValueError(f"unknown modifier {mod!r} in {key_id!r}")
            flags[lower] = True
        if key == "space":
            key = " "
        if len(key) == 1 and any(flags.values()):
            key = key.lower()
        return cls(key, **flags)

    @property
    def id(self) -> KeyId:
        prefix = ""
        if self.ctrl:
            prefix += "ctrl+"
        if self.shift:
            prefix += "shift+"
        if self.alt:
            prefix += "alt+"
        return prefix + ("space" if self.key == " " else self.key)

    @property
    def modifiers(self) -> int:
        bits = 0
        if self.shift:
            bits |= MODIFIERS["shift"]
        if self.alt:
            bits |= MODIFIERS["alt"]
        if self.ctrl:
            bits |= MODIFIERS["ctrl"]
        return bits

    @property
    def is_char(self) -> bool:
        """True for a single printable character key."""
        return len(self.key) == 1 and self.key.isprintable()

    def matches(self, key_id: KeyId) -> bool:
        """Compare key and modifiers against *key_id*, ignoring ``kind``."""
        try:
            other = KeyEvent.from_id(key_id)
        except ValueError:
            return False
        return (
            self.key == other.key
            and self.ctrl == other.ctrl
            and self.shift == other.shift
            and self.alt == other.alt
        )


@dataclass(frozen=True)
class PasteEvent:
    """Text delivered through bracketed paste."""

    text: str


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal was resized."""

    columns: int
    rows: int


Event = Union[KeyEvent, PasteEvent, ResizeEvent]


# ---------------------------------------------------------------------------
# Sequence tables
# ---------------------------------------------------------------------------

# Final byte of ``CSI [1;<mod>] X`` and ``SS3 X`` sequences.
_LETTER_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

# Parameter of ``CSI <n> [;<mod>] ~`` sequences.
_TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    7: "home",
    8: "end",
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}

# Kitty codepoints that name non-printing keys.
_KITTY_KEYS: dict[int, str] = {
    9: "tab",
    13: "enter",
    27: "escape",
    127: "backspace",
    57414: "enter",  # keypad enter
    **{57364 + i: f"f{i + 1}" for i in range(12)},
}

_CONTROL_CHARS: dict[str, KeyEvent] = {
    "\x1b": KeyEvent("escape"),
    "\r": KeyEvent("enter"),
    "\n": KeyEvent("enter"),
    "\t": KeyEvent("tab"),
    "\x7f": KeyEvent("backspace"),
    "\x08": KeyEvent("backspace"),
    "\x00": KeyEvent(" ", ctrl=True),
}

_EVENT_KINDS: dict[int, KeyEventKind] = {1: "press", 2: "repeat", 3: "release"}

_CSI_U_RE = re.compile(r"^\x1b\[(\d+)(?::(\d*)(?::(\d+))?)?(?:;(\d+)(?::(\d+))?)?u$")
_CSI_LETTER_RE = re.compile(r"^\x1b\[(?:1;(\d+)(?::(\d+))?)?([ABCDHFPQRS])$")
_CSI_TILDE_RE = re.compile(r"^\x1b\[(\d+)(?:;(\d+)(?::(\d+))?)?~$")
_MODIFY_OTHER_KEYS_RE = re.compile(r"^\x1b\[27;(\d+);(\d+)~$")
_SS3_RE = re.compile(r"^\x1bO([ABCDHFPQRS])$")


def _with_modifier(
    key: str, raw_modifier: Optional[str], raw_kind: Optional[str] = None
) -> KeyEvent:
    mod = (int(raw_modifier) - 1) & ~LOCK_MASK if raw_modifier else 0
    kind = _EVENT_KINDS.get(int(raw_kind), "press") if raw_kind else "press"
    shift = bool(mod & MODIFIERS["shift"])
    if len(key) == 1 and key.lower() != key:
        key = key.lower()
        shift = True
    elif len(key) == 1 and mod:
        key = key.lower()
    return KeyEvent(
        key,
        ctrl=bool(mod & MODIFIERS["ctrl"]),
        shift=shift,
        alt=bool(mod & MODIFIERS["alt"]),
        kind=kind,
    )


def _codepoint_key(codepoint: int) -> Optional[str]:
    named = _KITTY_KEYS.get(codepoint)
    if named is not None:
        return named
    if codepoint <= 0 or codepoint > 0x10FFFF:
        return None
    ch = chr(codepoint)
    return ch if ch.isprintable() else None


def _printable(ch: str) -> KeyEvent:
    # A cased capital arrives without a modifier flag in legacy mode.
    if ch.lower() != ch and ch.lower().upper() == ch:
        return KeyEvent(ch.lower(), shift=True)
    return KeyEvent(ch)


def parse_key_event(data: str) -> KeyEvent | None:  # noqa: C901
    """Decode one complete input sequence into a ``KeyEvent``.

    Returns ``None`` for anything that is not a recognised key.
    """
    if not data:
        return None

    if data.startswith("\x1b["):
        m = _CSI_U_RE.match(data)
        if m:
            key = _codepoint_key(int(m.group(1)))
            if key is None:
                return None
            return _with_modifier(key, m.group(4), m.group(5))

        m = _CSI_LETTER_RE.match(data)
        if m:
            return _with_modifier(_LETTER_KEYS[m.group(3)], m.group(1), m.group(2))

        m = _MODIFY_OTHER_KEYS_RE.match(data)
        if m:
            key = _codepoint_key(int(m.group(2)))
            if key is None:
                return None
            return _with_modifier(key, m.group(1))

        m = _CSI_TILDE_RE.match(data)
        if m:
            name = _TILDE_KEYS.get(int(m.group(1)))
            if name is None:
                return None
            return _with_modifier(name, m.group(2), m.group(3))

        if data == "\x1b[Z":
            return KeyEvent("tab", shift=True)
        return None

    m = _SS3_RE.match(data)
    if m:
        return KeyEvent(_LETTER_KEYS[m.group(1)])

    if data in _CONTROL_CHARS:
        return _CONTROL_CHARS[data]

    # Ctrl + letter (0x01 - 0x1a)
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return KeyEvent(chr(ord(data) + ord("a") - 1), ctrl=True)

    # Alt + key arrives ESC-prefixed
    if len(data) == 2 and data[0] == "\x1b":
        inner = parse_key_event(data[1])
        if inner is None:
            return None
        return KeyEvent(inner.key, ctrl=inner.ctrl, shift=inner.shift, alt=True)

    if len(data) == 1 and data.isprintable():
        return _printable(data)

    return None
