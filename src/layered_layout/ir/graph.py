"""VisualGraph — the owned, mutable graph every layout phase works on.

Nodes and edges live in arenas addressed by integer handles. Handles come
from monotonically increasing counters and are never reused, so a handle
stays valid while nodes move between rows. Topology used by the layout
phases is mirrored into a networkx DiGraph over node handles.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator

import networkx as nx

from layered_layout.config import LayoutConfig
from layered_layout.errors import MalformedGraphError
from layered_layout.ir.elements import Arrow, Element
from layered_layout.types import Orientation

_log = logging.getLogger(__name__)


class VisualGraph:
    """A graph of sized elements and arrows, laid out in place.

    Build it with :meth:`add_node` and :meth:`add_edge`, then call
    :meth:`prepare_render` to compute positions and edge paths, and
    :meth:`render` to replay the result into a render backend.
    """

    def __init__(
        self,
        orientation: Orientation = Orientation.TopToBottom,
        config: LayoutConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._orientation = orientation
        self.config = config if config is not None else LayoutConfig()
        self.logger = logger if logger is not None else _log
        self.dag: nx.DiGraph = nx.DiGraph()
        self.rows: list[list[int]] = []
        self.debug = False
        self._nodes: dict[int, Element] = {}
        self._edges: dict[int, Arrow] = {}
        self._rank: dict[int, int] = {}
        self._owned: set[int] = set()
        self._next_node = 0
        self._next_edge = 0
        self._busy = False

    # ─── Construction ────────────────────────────────────────────────────

    def add_node(self, element: Element) -> int:
        """Add an element and return its handle.

        Raises:
            MalformedGraphError: If the size is negative or not finite, or the
                element object is already part of this graph.
        """
        if id(element) in self._owned:
            raise MalformedGraphError("element is already part of this graph")
        w, h = element.size.x, element.size.y
        if not (math.isfinite(w) and math.isfinite(h)) or w < 0 or h < 0:
            raise MalformedGraphError(f"node size must be finite and non-negative, got ({w}, {h})")
        self._owned.add(id(element))
        return self._insert_node(element)

    def add_edge(self, arrow: Arrow, src: int, dst: int) -> int:
        """Add an arrow from ``src`` to ``dst`` and return its handle.

        Raises:
            MalformedGraphError: If either handle is unknown, the edge is a
                self-loop, the edge would close a cycle, or the arrow object
                is already part of this graph.
        """
        if id(arrow) in self._owned:
            raise MalformedGraphError("arrow is already part of this graph")
        for handle in (src, dst):
            if handle not in self._nodes or self._nodes[handle].is_connector():
                raise MalformedGraphError(f"unknown node handle {handle}")
        if src == dst:
            raise MalformedGraphError(f"self-loop on node handle {src}")
        if nx.has_path(self.dag, dst, src):
            raise MalformedGraphError(f"edge {src} -> {dst} would close a cycle")

        handle = self._next_edge
        self._next_edge += 1
        arrow.src = src
        arrow.dst = dst
        arrow.via = []
        arrow.path = []
        self._edges[handle] = arrow
        self._owned.add(id(arrow))
        self.dag.add_edge(src, dst)
        return handle

    def _insert_node(self, element: Element) -> int:
        handle = self._next_node
        self._next_node += 1
        self._nodes[handle] = element
        self.dag.add_node(handle)
        return handle

    # ─── Queries ─────────────────────────────────────────────────────────

    def orientation(self) -> Orientation:
        return self._orientation

    def num_nodes(self) -> int:
        """Number of caller-owned nodes (connectors are not counted)."""
        return sum(1 for el in self._nodes.values() if not el.is_connector())

    def num_edges(self) -> int:
        return len(self._edges)

    def element(self, handle: int) -> Element:
        return self._nodes[handle]

    def arrow(self, handle: int) -> Arrow:
        return self._edges[handle]

    def is_connector(self, handle: int) -> bool:
        return self._nodes[handle].is_connector()

    def iter_nodes(self) -> Iterator[tuple[int, Element]]:
        """Yield (handle, element) for caller-owned nodes in handle order."""
        for handle, el in self._nodes.items():
            if not el.is_connector():
                yield handle, el

    def iter_all_nodes(self) -> Iterator[tuple[int, Element]]:
        yield from self._nodes.items()

    def iter_edges(self) -> Iterator[tuple[int, Arrow]]:
        yield from self._edges.items()

    def rank_of(self, handle: int) -> int:
        return self._rank[handle]

    def order_of(self, handle: int) -> int:
        return self.rows[self._rank[handle]].index(handle)

    def predecessors(self, handle: int) -> list[int]:
        return list(self.dag.predecessors(handle))

    def successors(self, handle: int) -> list[int]:
        return list(self.dag.successors(handle))

    # ─── Row bookkeeping ─────────────────────────────────────────────────

    def set_rows(self, rows: list[list[int]]) -> None:
        self.rows = rows
        self._reindex()

    def move_node(self, handle: int, rank: int, index: int) -> None:
        """Move ``handle`` to row ``rank`` at position ``index``."""
        self.rows[self._rank[handle]].remove(handle)
        self.rows[rank].insert(index, handle)
        self._rank[handle] = rank

    def drop_empty_rows(self) -> None:
        self.rows = [row for row in self.rows if row]
        self._reindex()

    def add_connector(self, rank: int, index: int) -> int:
        handle = self._insert_node(Element.connector(self.config.connector_size))
        self.rows[rank].insert(index, handle)
        self._rank[handle] = rank
        return handle

    def remove_connectors(self) -> None:
        """Discard every connector and restore direct edges for all arrows."""
        connectors = [h for h, el in self._nodes.items() if el.is_connector()]
        for handle in connectors:
            del self._nodes[handle]
            self._rank.pop(handle, None)
        self.dag.remove_nodes_from(connectors)
        dropped = set(connectors)
        self.rows = [[h for h in row if h not in dropped] for row in self.rows]
        for arrow in self._edges.values():
            arrow.via = []
            self.dag.add_edge(arrow.src, arrow.dst)

    def _reindex(self) -> None:
        self._rank = {h: r for r, row in enumerate(self.rows) for h in row}

    # ─── Pipeline ────────────────────────────────────────────────────────

    def transpose(self) -> None:
        """Swap the x and y axes of every element and path (self-inverse)."""
        for el in self._nodes.values():
            el.transpose()
        for arrow in self._edges.values():
            arrow.transpose()
        self._orientation = self._orientation.transpose()

    def prepare_render(self, debug: bool = False, skip_refinement: bool = False) -> None:
        """Run the full layout pipeline on this graph.

        Args:
            debug: Log per-phase geometry at DEBUG level.
            skip_refinement: Stop after the first placement pass (no BK).
        """
        from layered_layout.layout.placer import Placer
        from layered_layout.layout.ranking import prepare_ranks

        if self._busy:
            raise RuntimeError("prepare_render is already running on this graph")
        self._busy = True
        try:
            self.debug = debug
            prepare_ranks(self)
            Placer(self, self.logger).layout(skip_refinement)
        finally:
            self._busy = False

    def render(self, debug: bool, backend) -> None:
        """Replay the laid-out graph into ``backend`` as draw calls."""
        from layered_layout.renderers.draw import render_graph

        render_graph(self, backend, debug)
