"""Base render backend protocol."""

from __future__ import annotations

from typing import Protocol

from layered_layout.ir.elements import StyleAttr
from layered_layout.types import Point

ClipHandle = int


class RenderBackend(Protocol):
    """Draw-call sink that every render backend must implement.

    Coordinates are in graph space; scaling to a viewport is up to the
    backend.
    """

    def draw_rect(self, xy: Point, size: Point, look: StyleAttr, clip: ClipHandle | None = None) -> None: ...

    def draw_circle(self, xy: Point, size: Point, look: StyleAttr) -> None: ...

    def draw_text(self, xy: Point, text: str, look: StyleAttr) -> None: ...

    def draw_arrow(
        self,
        path: list[tuple[Point, Point]],
        dashed: bool,
        head: tuple[bool, bool],
        look: StyleAttr,
        text: str,
    ) -> None:
        """Draw an edge.

        ``path[0]`` is (start point, exit control point); every following
        pair is (entry control point, point).
        """
        ...

    def draw_line(self, start: Point, stop: Point, look: StyleAttr) -> None: ...

    def create_clip(self, xy: Point, size: Point, rounded_px: int) -> ClipHandle: ...
