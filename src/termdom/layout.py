"""Rectangles and constraint-based splitting of screen areas."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Sequence, Union

from termdom.errors import TermdomError

__all__ = [
    "Constraint",
    "Direction",
    "Fill",
    "LayoutError",
    "Length",
    "Percentage",
    "Ratio",
    "Rect",
    "Size",
    "equal_constraints",
    "split",
]


class LayoutError(TermdomError, ValueError):
    """A constraint or rectangle is malformed."""


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass(frozen=True)
class Rect:
    """A screen area in cells; ``x``/``y`` are the top-left corner."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise LayoutError(f"negative size in {self!r}")

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def inner(self, margin: int = 1) -> Rect:
        """Shrink by *margin* cells on every side (never below zero)."""
        width = max(0, self.width - 2 * margin)
        height = max(0, self.height - 2 * margin)
        return Rect(self.x + min(margin, self.width), self.y + min(margin, self.height), width, height)

    def intersection(self, other: Rect) -> Rect:
        x = max(self.x, other.x)
        y = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return Rect(x, y, max(0, right - x), max(0, bottom - y))

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom


class Direction(enum.Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Length:
    """Exactly ``value`` cells."""

    value: int


@dataclass(frozen=True)
class Percentage:
    """``value`` percent of the available length."""

    value: float


@dataclass(frozen=True)
class Ratio:
    """``numerator / denominator`` of the available length."""

    numerator: int
    denominator: int


@dataclass(frozen=True)
class Fill:
    """Share of whatever is left, proportional to ``weight``."""

    weight: int = 1


Constraint = Union[Length, Percentage, Ratio, Fill]


def equal_constraints(count: int) -> list[Constraint]:
    """``count`` equal shares of the available length."""
    if count <= 0:
        return []
    return [Ratio(1, count) for _ in range(count)]


def _wanted(constraint: Constraint, total: int) -> float | None:
    """Exact (possibly fractional) size a non-``Fill`` constraint asks for."""
    if isinstance(constraint, Length):
        if constraint.value < 0:
            raise LayoutError(f"negative length: {constraint!r}")
        return float(constraint.value)
    if isinstance(constraint, Percentage):
        if constraint.value < 0:
            raise LayoutError(f"negative percentage: {constraint!r}")
        return total * constraint.value / 100
    if isinstance(constraint, Ratio):
        if constraint.denominator <= 0 or constraint.numerator < 0:
            raise LayoutError(f"invalid ratio: {constraint!r}")
        return total * constraint.numerator / constraint.denominator
    if isinstance(constraint, Fill):
        if constraint.weight < 0:
            raise LayoutError(f"negative fill weight: {constraint!r}")
        return None
    raise LayoutError(f"unknown constraint: {constraint!r}")


def _sizes(total: int, constraints: Sequence[Constraint]) -> list[int]:
    wanted = [_wanted(c, total) for c in constraints]
    sizes = [math.floor(w) if w is not None else 0 for w in wanted]

    # Largest-remainder rounding so that e.g. three thirds of 10 tile to 10.
    exact = sum(w for w in wanted if w is not None)
    deficit = min(round(exact), total) - sum(sizes)
    if deficit > 0:
        by_remainder = sorted(
            (i for i, w in enumerate(wanted) if w is not None and w != math.floor(w)),
            key=lambda i: (-(wanted[i] - sizes[i]), i),  # type: ignore[operator]
        )
        for i in by_remainder[:deficit]:
            sizes[i] += 1

    remaining = total
    for i, w in enumerate(wanted):
        if w is None:
            continue
        sizes[i] = min(sizes[i], remaining)
        remaining -= sizes[i]

    fills = [i for i, w in enumerate(wanted) if w is None]
    weight = sum(constraints[i].weight for i in fills)  # type: ignore[union-attr]
    if fills and weight > 0:
        handed_out = 0
        for i in fills:
            share = remaining * constraints[i].weight // weight  # type: ignore[union-attr]
            sizes[i] = share
            handed_out += share
        # Rounding leftovers go to the last fill.
        sizes[fills[-1]] += remaining - handed_out

    return sizes


def split(area: Rect, direction: Direction, constraints: Sequence[Constraint]) -> list[Rect]:
    """Divide *area* along *direction*, one rectangle per constraint.

    Rectangles are laid out in order without overlapping.  Fixed and
    proportional constraints are satisfied first, clamped to what is left;
    ``Fill`` constraints share the rest by weight.
    """
    horizontal = direction is Direction.HORIZONTAL
    total = area.width if horizontal else area.height
    rects: list[Rect] = []
    offset = 0
    for size in _sizes(total, constraints):
        if horizontal:
            rects.append(Rect(area.x + offset, area.y, size, area.height))
        else:
            rects.append(Rect(area.x, area.y + offset, area.width, size))
        offset += size
    return rects
