"""Shared type definitions for layered-layout.

Enums and small geometry types used across the graph model, layout phases,
and render backends.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Orientation(Enum):
    TopToBottom = auto()
    LeftToRight = auto()
    BottomToTop = auto()
    RightToLeft = auto()

    @classmethod
    def default(cls) -> Orientation:
        return cls.TopToBottom

    def is_top_to_bottom(self) -> bool:
        """True when ranks stack along the y axis (TopToBottom or its mirror)."""
        return self in (Orientation.TopToBottom, Orientation.BottomToTop)

    def is_left_to_right(self) -> bool:
        return self in (Orientation.LeftToRight, Orientation.RightToLeft)

    def is_reversed(self) -> bool:
        """True for the mirrored variants, where rank 0 sits at the far end."""
        return self in (Orientation.BottomToTop, Orientation.RightToLeft)

    def transpose(self) -> Orientation:
        return _TRANSPOSED[self]


_TRANSPOSED: dict[Orientation, Orientation] = {
    Orientation.TopToBottom: Orientation.LeftToRight,
    Orientation.LeftToRight: Orientation.TopToBottom,
    Orientation.BottomToTop: Orientation.RightToLeft,
    Orientation.RightToLeft: Orientation.BottomToTop,
}


@dataclass
class Point:
    """A 2D point (or size vector) in graph coordinates."""

    x: float
    y: float

    @classmethod
    def zero(cls) -> Point:
        return cls(0.0, 0.0)

    def add(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def sub(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> Point:
        return Point(self.x * factor, self.y * factor)

    def transpose(self) -> Point:
        return Point(self.y, self.x)
