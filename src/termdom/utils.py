"""Display-width measurement and wrapping of plain text.

Widths are measured per grapheme cluster: combining marks and format
characters take no cells, East Asian wide characters and emoji take two.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth

__all__ = [
    "grapheme_width",
    "graphemes",
    "truncate_to_width",
    "visible_width",
    "wrap_text",
]

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def graphemes(text: str) -> list[str]:
    return list(grapheme.graphemes(text))


def grapheme_width(g: str) -> int:
    """Terminal display width of a single grapheme cluster."""
    if not g:
        return 0
    cached = _width_cache.get(g)
    if cached is not None:
        return cached

    first = g[0]
    cp = ord(first)
    if cp < 0x20 or 0x7F <= cp <= 0x9F:
        width = 0
    elif len(g) > 1 and ("\ufe0f" in g or "\u200d" in g):
        # Emoji presentation or ZWJ sequence
        width = 2
    elif unicodedata.category(first) in ("Mn", "Me", "Cf"):
        width = 0
    else:
        width = max(_wcwidth.wcwidth(first), 0)

    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[g] = width
    return width


def visible_width(text: str) -> int:
    """Number of terminal columns *text* occupies."""
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(grapheme_width(g) for g in grapheme.graphemes(text))


def truncate_to_width(text: str, max_width: int, ellipsis: str = "") -> str:
    """Cut *text* so it fits in *max_width* columns, appending *ellipsis*."""
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text
    budget = max_width - visible_width(ellipsis)
    if budget <= 0:
        return truncate_to_width(ellipsis, max_width)
    out: list[str] = []
    used = 0
    for g in grapheme.graphemes(text):
        w = grapheme_width(g)
        if used + w > budget:
            break
        out.append(g)
        used += w
    return "".join(out) + ellipsis


def wrap_text(text: str, width: int, *, trim: bool = True) -> list[str]:
    """Word-wrap *text* to *width* columns, honouring existing newlines.

    Words wider than the line are broken at grapheme boundaries.  With
    *trim*, leading whitespace of continuation lines is dropped.
    """
    if width <= 0:
        return []
    lines: list[str] = []
    for paragraph in text.split("\n"):
        lines.extend(_wrap_paragraph(paragraph, width, trim))
    return lines


def _wrap_paragraph(paragraph: str, width: int, trim: bool) -> list[str]:
    if not paragraph:
        return [""]

    lines: list[str] = []
    current = ""
    current_width = 0

    # Tokens alternate between runs of spaces and runs of non-spaces.
    tokens: list[str] = []
    for ch in paragraph:
        if tokens and (ch == " ") == (tokens[-1][0] == " "):
            tokens[-1] += ch
        else:
            tokens.append(ch)

    for token in tokens:
        token_width = visible_width(token)
        is_space = token[0] == " "

        if current_width + token_width <= width:
            current += token
            current_width += token_width
            continue

        if is_space:
            lines.append(current)
            current = "" if trim else token[: max(0, width)]
            current_width = visible_width(current)
            continue

        if current:
            lines.append(current)
            current, current_width = "", 0

        for g in grapheme.graphemes(token):
            w = grapheme_width(g)
            if current_width + w > width and current:
                lines.append(current)
                current, current_width = "", 0
            current += g
            current_width += w

    lines.append(current)
    if trim:
        lines = [line.rstrip(" ") for line in lines]
    return lines
