"""Trace backend — records draw calls and formats them as text.

Useful for tests, the CLI, and for inspecting a layout without a GUI.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from layered_layout.ir.elements import StyleAttr
from layered_layout.renderers.base import ClipHandle
from layered_layout.types import Point

WINDOW_PAD: float = 5.0


@dataclass
class DrawCall:
    kind: str
    points: list[Point]
    look: StyleAttr
    text: str = ""
    dashed: bool = False
    head: tuple[bool, bool] = (False, False)
    clip: ClipHandle | None = None


@dataclass
class ClipInfo:
    xy: Point
    size: Point
    rounded_px: int


def _fmt(p: Point) -> str:
    return f"({p.x:g}, {p.y:g})"


@dataclass
class TraceWriter:
    calls: list[DrawCall] = field(default_factory=list)
    clips: dict[ClipHandle, ClipInfo] = field(default_factory=dict)
    view_size: Point = field(default_factory=Point.zero)

    def grow_window(self, point: Point, size: Point) -> None:
        """Grow the view so it covers ``point + size`` plus a small pad."""
        self.view_size.x = max(self.view_size.x, point.x + size.x + WINDOW_PAD)
        self.view_size.y = max(self.view_size.y, point.y + size.y + WINDOW_PAD)

    def of_kind(self, kind: str) -> list[DrawCall]:
        return [c for c in self.calls if c.kind == kind]

    # ─── RenderBackend ───────────────────────────────────────────────────

    def draw_rect(self, xy: Point, size: Point, look: StyleAttr, clip: ClipHandle | None = None) -> None:
        self.grow_window(xy, size)
        self.calls.append(DrawCall("rect", [xy, size], look, clip=clip))

    def draw_circle(self, xy: Point, size: Point, look: StyleAttr) -> None:
        self.grow_window(xy, size)
        self.calls.append(DrawCall("circle", [xy, size], look))

    def draw_text(self, xy: Point, text: str, look: StyleAttr) -> None:
        self.calls.append(DrawCall("text", [xy], look, text=text))

    def draw_arrow(
        self,
        path: list[tuple[Point, Point]],
        dashed: bool,
        head: tuple[bool, bool],
        look: StyleAttr,
        text: str,
    ) -> None:
        points: list[Point] = []
        for a, b in path:
            self.grow_window(a, Point.zero())
            self.grow_window(b, Point.zero())
            points += [a, b]
        self.calls.append(DrawCall("arrow", points, look, text=text, dashed=dashed, head=head))

    def draw_line(self, start: Point, stop: Point, look: StyleAttr) -> None:
        self.calls.append(DrawCall("line", [start, stop], look))

    def create_clip(self, xy: Point, size: Point, rounded_px: int) -> ClipHandle:
        handle = len(self.clips)
        self.clips[handle] = ClipInfo(xy=xy, size=size, rounded_px=rounded_px)
        return handle

    # ─── Output ──────────────────────────────────────────────────────────

    def scaled(self, window: Point) -> TraceWriter:
        """Return a copy with every coordinate fitted into ``window``.

        Both axes are divided by the larger side of the view, so the
        drawing keeps its aspect ratio when ``window`` is square. An empty
        view is returned unscaled.
        """
        extent = max(self.view_size.x, self.view_size.y)
        if extent <= 0:
            sx = sy = 1.0
        else:
            sx, sy = window.x / extent, window.y / extent

        def fit(p: Point) -> Point:
            return Point(p.x * sx, p.y * sy)

        out = TraceWriter(view_size=fit(self.view_size))
        for call in self.calls:
            out.calls.append(replace(call, points=[fit(p) for p in call.points]))
        for handle, clip in self.clips.items():
            out.clips[handle] = ClipInfo(fit(clip.xy), fit(clip.size), clip.rounded_px)
        return out

    def to_text(self) -> str:
        lines = [f"view {_fmt(self.view_size)}"]
        for call in self.calls:
            coords = " ".join(_fmt(p) for p in call.points)
            line = f"{call.kind} {coords}"
            if call.kind == "arrow":
                line += f" dashed={call.dashed} head={call.head}"
            if call.text:
                line += f" {call.text!r}"
            lines.append(line)
        return "\n".join(lines) + "\n"
