"""Node and edge records stored in a VisualGraph arena.

Shapes and styles are carried through to render backends untouched; the
layout phases only read sizes and write positions and paths.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from layered_layout.types import Point


class ShapeKind(Enum):
    Box = auto()
    Circle = auto()
    DoubleCircle = auto()
    Connector = auto()  # virtual routing node owned by the layout core

    @classmethod
    def default(cls) -> ShapeKind:
        return cls.Box


class LineStyle(Enum):
    Normal = auto()
    Dashed = auto()
    Dotted = auto()


@dataclass
class StyleAttr:
    line_color: str = "black"
    line_width: int = 2
    fill_color: str | None = "white"
    rounded: int = 0
    font_size: int = 15

    @classmethod
    def simple(cls) -> StyleAttr:
        return cls()


@dataclass
class Element:
    """A drawable graph vertex with a fixed size.

    ``pos`` is the top-left corner and stays ``None`` until a coordinate
    pass has run.
    """

    shape: ShapeKind
    size: Point
    look: StyleAttr = field(default_factory=StyleAttr.simple)
    label: str = ""
    pos: Point | None = None

    @classmethod
    def create(cls, shape: ShapeKind, look: StyleAttr, size: Point, label: str = "") -> Element:
        return cls(shape=shape, size=Point(size.x, size.y), look=look, label=label)

    @classmethod
    def box(cls, label: str, size: Point) -> Element:
        return cls.create(ShapeKind.Box, StyleAttr.simple(), size, label)

    @classmethod
    def connector(cls, size: float = 0.0) -> Element:
        return cls(shape=ShapeKind.Connector, size=Point(size, size), look=StyleAttr.simple())

    def is_connector(self) -> bool:
        return self.shape == ShapeKind.Connector

    @property
    def width(self) -> float:
        return self.size.x

    @property
    def height(self) -> float:
        return self.size.y

    def center(self) -> Point:
        if self.pos is None:
            raise ValueError("element has no position yet")
        return Point(self.pos.x + self.size.x / 2, self.pos.y + self.size.y / 2)

    def bbox(self) -> tuple[Point, Point]:
        """Return (top_left, bottom_right)."""
        if self.pos is None:
            raise ValueError("element has no position yet")
        return self.pos, self.pos.add(self.size)

    def transpose(self) -> None:
        self.size = self.size.transpose()
        if self.pos is not None:
            self.pos = self.pos.transpose()


@dataclass
class Arrow:
    """A directed connection between two elements.

    ``via`` lists the connector handles the edge passes through when it
    spans more than one rank; ``path`` holds the routed points once the
    edge router has run.
    """

    label: str = ""
    look: StyleAttr = field(default_factory=StyleAttr.simple)
    line_style: LineStyle = LineStyle.Normal
    heads: tuple[bool, bool] = (False, True)
    src: int = -1
    dst: int = -1
    via: list[int] = field(default_factory=list)
    path: list[Point] = field(default_factory=list)

    @classmethod
    def simple(cls, label: str = "") -> Arrow:
        return cls(label=label)

    @classmethod
    def dashed(cls, label: str = "") -> Arrow:
        return cls(label=label, line_style=LineStyle.Dashed)

    def is_dashed(self) -> bool:
        return self.line_style != LineStyle.Normal

    def transpose(self) -> None:
        self.path = [p.transpose() for p in self.path]
