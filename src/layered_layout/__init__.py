"""layered-layout: layered (Sugiyama-style) placement of directed graphs."""

import logging

from layered_layout.config import LayoutConfig
from layered_layout.errors import InvariantViolation, LayoutError, MalformedGraphError
from layered_layout.ir import Arrow, Element, LineStyle, ShapeKind, StyleAttr, VisualGraph
from layered_layout.renderers import RenderBackend, TraceWriter
from layered_layout.types import Orientation, Point

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Arrow",
    "Element",
    "InvariantViolation",
    "LayoutConfig",
    "LayoutError",
    "LineStyle",
    "MalformedGraphError",
    "Orientation",
    "Point",
    "RenderBackend",
    "ShapeKind",
    "StyleAttr",
    "TraceWriter",
    "VisualGraph",
    "layout_edge_list",
]


def layout_edge_list(
    edges: list[tuple[str, str]],
    orientation: Orientation = Orientation.TopToBottom,
    size: Point | None = None,
    skip_refinement: bool = False,
) -> tuple[VisualGraph, dict[str, int]]:
    """Build a graph of equally sized boxes from named edges and lay it out.

    Args:
        edges: (source, destination) name pairs; a pair whose destination is
            empty adds an isolated node.
        orientation: Layout orientation.
        size: Box size for every node (default 100x50).
        skip_refinement: Skip the Brandes–Köpf phase.

    Returns:
        The laid-out graph and a name -> node handle map.

    Raises:
        MalformedGraphError: If the edges contain a self-loop or a cycle.
    """
    box = size if size is not None else Point(100.0, 50.0)
    vg = VisualGraph(orientation)
    handles: dict[str, int] = {}

    def node(name: str) -> int:
        if name not in handles:
            handles[name] = vg.add_node(Element.box(name, box))
        return handles[name]

    for src, dst in edges:
        a = node(src)
        if dst:
            vg.add_edge(Arrow.simple(), a, node(dst))
    vg.prepare_render(False, skip_refinement)
    return vg, handles
