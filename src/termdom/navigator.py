"""UTF-8 codepoint boundary navigation over byte buffers.

Offsets are byte offsets into UTF-8 encoded text.  A *boundary* is an offset
that starts a scalar value, or the one-past-end offset.  Stepping from a
non-boundary offset is a caller bug and raises ``BoundaryError``.

    0xxxxxxx                             -> 1 byte
    110xxxxx 10xxxxxx                    -> 2 bytes
    1110xxxx 10xxxxxx 10xxxxxx           -> 3 bytes
    11110xxx 10xxxxxx 10xxxxxx 10xxxxxx  -> 4 bytes
"""

from __future__ import annotations

from typing import Union

from termdom.errors import TermdomError

__all__ = [
    "BoundaryError",
    "codepoint_len",
    "is_boundary",
    "next_boundary",
    "prev_boundary",
]

Buffer = Union[bytes, bytearray, memoryview]


class BoundaryError(TermdomError, ValueError):
    """An offset does not lie on a UTF-8 scalar boundary."""

    def __init__(self, offset: int, length: int, reason: str) -> None:
        super().__init__(f"offset {offset} in buffer of {length} bytes: {reason}")
        self.offset = offset
        self.length = length


def _is_continuation(byte: int) -> bool:
    return byte & 0b1100_0000 == 0b1000_0000


def codepoint_len(lead: int) -> int:
    """Return the encoded width of the scalar starting with *lead*."""
    if lead < 0x80:
        return 1
    if lead & 0b1110_0000 == 0b1100_0000:
        return 2
    if lead & 0b1111_0000 == 0b1110_0000:
        return 3
    if lead & 0b1111_1000 == 0b1111_0000:
        return 4
    raise BoundaryError(-1, -1, f"byte 0x{lead:02x} is not a leading byte")


def is_boundary(buf: Buffer, index: int) -> bool:
    """Return ``True`` if *index* starts a scalar or is one-past-end."""
    if index < 0 or index > len(buf):
        return False
    if index == len(buf):
        return True
    return not _is_continuation(buf[index])


def _check(buf: Buffer, index: int) -> None:
    if index < 0 or index > len(buf):
        raise BoundaryError(index, len(buf), "out of range")
    if index < len(buf) and _is_continuation(buf[index]):
        raise BoundaryError(index, len(buf), "inside a multi-byte sequence")


def next_boundary(buf: Buffer, index: int) -> int:
    """Offset of the codepoint after the one at *index*.

    One-past-end is returned unchanged.
    """
    _check(buf, index)
    if index == len(buf):
        return index
    try:
        width = codepoint_len(buf[index])
    except BoundaryError:
        raise BoundaryError(index, len(buf), "invalid leading byte") from None
    end = index + width
    if end > len(buf):
        raise BoundaryError(index, len(buf), "truncated sequence")
    return end


def prev_boundary(buf: Buffer, index: int) -> int:
    """Offset of the codepoint before *index*.

    Offset 0 is returned unchanged.
    """
    _check(buf, index)
    if index == 0:
        return index

    start = index - 1
    # At most three continuation bytes precede a leading byte.
    while start > 0 and index - start < 4 and _is_continuation(buf[start]):
        start -= 1

    try:
        width = codepoint_len(buf[start])
    except BoundaryError:
        raise BoundaryError(index, len(buf), "no leading byte before offset") from None
    if start + width != index:
        raise BoundaryError(index, len(buf), "malformed sequence before offset")
    return start
