"""Colors and text attributes, rendered as ANSI SGR sequences."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

__all__ = ["Color", "Style"]


class Color(enum.Enum):
    """The 16 standard ANSI colors; the value is the foreground SGR code."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    GRAY = 37
    DARK_GRAY = 90
    LIGHT_RED = 91
    LIGHT_GREEN = 92
    LIGHT_YELLOW = 93
    LIGHT_BLUE = 94
    LIGHT_MAGENTA = 95
    LIGHT_CYAN = 96
    WHITE = 97

    @property
    def fg_code(self) -> int:
        return self.value

    @property
    def bg_code(self) -> int:
        return self.value + 10


@dataclass(frozen=True)
class Style:
    """Foreground/background color plus text attributes.

    ``None`` means "inherit": patching one style onto another only overrides
    the fields that are set.
    """

    fg: Color | None = None
    bg: Color | None = None
    bold: bool | None = None
    dim: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    reversed: bool | None = None

    def patch(self, other: Style) -> Style:
        """Return this style with every field set in *other* applied on top."""
        changes = {
            name: value
            for name, value in vars(other).items()
            if value is not None
        }
        return replace(self, **changes)

    def with_fg(self, color: Color) -> Style:
        return replace(self, fg=color)

    def with_bg(self, color: Color) -> Style:
        return replace(self, bg=color)

    def sgr(self) -> str:
        """Escape sequence that switches from the default style to this one."""
        codes: list[int] = []
        if self.bold:
            codes.append(1)
        if self.dim:
            codes.append(2)
        if self.italic:
            codes.append(3)
        if self.underline:
            codes.append(4)
        if self.reversed:
            codes.append(7)
        if self.fg is not None:
            codes.append(self.fg.fg_code)
        if self.bg is not None:
            codes.append(self.bg.bg_code)
        if not codes:
            return ""
        return "\x1b[" + ";".join(str(c) for c in codes) + "m"
