"""Replay a laid-out VisualGraph into a RenderBackend."""

from __future__ import annotations

from typing import TYPE_CHECKING

from layered_layout.errors import LayoutError
from layered_layout.ir.elements import Element, ShapeKind
from layered_layout.renderers.base import RenderBackend
from layered_layout.types import Orientation, Point

if TYPE_CHECKING:
    from layered_layout.ir.graph import VisualGraph

CONTROL_OFFSET: float = 20.0
DOUBLE_CIRCLE_GAP: float = 4.0
CONNECTOR_DEBUG_SIZE: float = 4.0

_RANK_AXIS: dict[Orientation, Point] = {
    Orientation.TopToBottom: Point(0.0, 1.0),
    Orientation.BottomToTop: Point(0.0, -1.0),
    Orientation.LeftToRight: Point(1.0, 0.0),
    Orientation.RightToLeft: Point(-1.0, 0.0),
}


def control_path(points: list[Point], orientation: Orientation) -> list[tuple[Point, Point]]:
    """Turn routed points into (point, control) pairs for draw_arrow.

    Control points sit on the rank axis, at most half way to the
    neighbouring point, so every segment leaves and enters along the
    direction of the layout.
    """
    if len(points) < 2:
        return []
    axis = _RANK_AXIS[orientation]

    def offset(a: Point, b: Point) -> Point:
        along = abs((b.x - a.x) * axis.x + (b.y - a.y) * axis.y)
        return axis.scale(min(CONTROL_OFFSET, along / 2))

    pairs = [(points[0], points[0].add(offset(points[0], points[1])))]
    for prev, p in zip(points, points[1:]):
        pairs.append((p.sub(offset(prev, p)), p))
    return pairs


def _draw_outline(backend: RenderBackend, el: Element) -> None:
    top_left, bottom_right = el.bbox()
    top_right = Point(bottom_right.x, top_left.y)
    bottom_left = Point(top_left.x, bottom_right.y)
    for start, stop in ((top_left, top_right), (top_right, bottom_right), (bottom_right, bottom_left), (bottom_left, top_left)):
        backend.draw_line(start, stop, el.look)


def render_element(backend: RenderBackend, el: Element, debug: bool) -> None:
    center = el.center()
    if el.shape == ShapeKind.Connector:
        if debug:
            backend.draw_circle(center, Point(CONNECTOR_DEBUG_SIZE, CONNECTOR_DEBUG_SIZE), el.look)
        return

    if el.shape == ShapeKind.Box:
        clip = backend.create_clip(el.pos, el.size, el.look.rounded) if el.look.rounded > 0 else None
        backend.draw_rect(el.pos, el.size, el.look, clip)
    elif el.shape == ShapeKind.Circle:
        backend.draw_circle(center, el.size, el.look)
    else:  # DoubleCircle
        backend.draw_circle(center, el.size, el.look)
        inner = Point(max(0.0, el.width - 2 * DOUBLE_CIRCLE_GAP), max(0.0, el.height - 2 * DOUBLE_CIRCLE_GAP))
        backend.draw_circle(center, inner, el.look)

    if el.label:
        backend.draw_text(center, el.label, el.look)
    if debug:
        _draw_outline(backend, el)


def render_graph(vg: VisualGraph, backend: RenderBackend, debug: bool = False) -> None:
    """Emit one group of draw calls per element and one draw_arrow per edge."""
    for handle, el in vg.iter_all_nodes():
        if el.pos is None:
            raise LayoutError(f"node {handle} has no position; call prepare_render first")

    for _, el in vg.iter_all_nodes():
        render_element(backend, el, debug)

    for _, arrow in vg.iter_edges():
        pairs = control_path(arrow.path, vg.orientation())
        if not pairs:
            continue
        backend.draw_arrow(pairs, arrow.is_dashed(), arrow.heads, arrow.look, arrow.label)
