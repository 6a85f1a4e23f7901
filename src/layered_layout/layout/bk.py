"""Balanced x-coordinate assignment (Brandes & Köpf, 2001).

Phases:
  1. Type-1 conflict marking (inner connector segments win)
  2. Vertical alignment into blocks, once per direction
     (down/up x left/right)
  3. Horizontal compaction over an explicit block graph
  4. Balancing: align the four results to the narrowest and average the
     two middle values per node
  5. Clamp each row back to a feasible spacing and normalize

All four directions run through the same left-to-right, top-down routines
on a transformed copy of the rows: rows are reversed for the upward passes
and row contents are reversed (and the result negated) for the rightward
passes. Coordinates inside this module are node centres.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import networkx as nx

from layered_layout.errors import InvariantViolation
from layered_layout.types import Point

if TYPE_CHECKING:
    from layered_layout.ir.graph import VisualGraph

Layers = list[list[int]]
Neighbors = Callable[[int], list[int]]


def mark_type1_conflicts(vg: VisualGraph, layers: Layers) -> set[tuple[int, int]]:
    """Mark non-inner segments that cross an inner segment.

    A segment is inner when both of its endpoints are connectors. Returns
    (upper, lower) handle pairs.
    """
    marked: set[tuple[int, int]] = set()
    for i in range(len(layers) - 1):
        upper, lower = layers[i], layers[i + 1]
        if not upper or not lower:
            continue
        upos = {v: k for k, v in enumerate(upper)}
        k0 = 0
        scan = 0
        for l1, v in enumerate(lower):
            inner = _inner_upper(vg, v)
            if l1 != len(lower) - 1 and inner is None:
                continue
            k1 = upos[inner] if inner is not None else len(upper) - 1
            while scan <= l1:
                w = lower[scan]
                for u in vg.predecessors(w):
                    k = upos[u]
                    if k < k0 or k > k1:
                        marked.add((u, w))
                scan += 1
            k0 = k1
    return marked


def _inner_upper(vg: VisualGraph, handle: int) -> int | None:
    if not vg.is_connector(handle):
        return None
    for u in vg.predecessors(handle):
        if vg.is_connector(u):
            return u
    return None


def vertical_alignment(
    layers: Layers,
    neighbors: Neighbors,
    conflicts: set[tuple[int, int]],
) -> tuple[dict[int, int], dict[int, int]]:
    """Align every node with a median neighbour in the previous layer.

    Returns (root, align): ``root`` maps a node to the top node of its
    block and ``align`` links each node to the next one in its block,
    cyclically.
    """
    pos = {v: i for row in layers for i, v in enumerate(row)}
    root = {v: v for row in layers for v in row}
    align = dict(root)

    for row in layers[1:]:
        r = -1
        for v in row:
            ns = sorted(neighbors(v), key=pos.__getitem__)
            if not ns:
                continue
            d = len(ns)
            for m in sorted({(d - 1) // 2, d // 2}):
                if align[v] != v:
                    break
                u = ns[m]
                if (u, v) in conflicts or (v, u) in conflicts:
                    continue
                if r < pos[u]:
                    align[u] = v
                    root[v] = root[u]
                    align[v] = root[v]
                    r = pos[u]
    return root, align


def horizontal_compaction(
    layers: Layers,
    root: dict[int, int],
    separation: Callable[[int, int], float],
) -> dict[int, float]:
    """Pack blocks as far left as the separation constraints allow.

    Each block becomes one node of a DAG with an edge from the block on the
    left to the block on the right wherever two of their members are
    neighbours in a row, weighted by the widest required separation.
    Longest paths from the sources give the block coordinates.
    """
    blocks: nx.DiGraph = nx.DiGraph()
    for row in layers:
        for v in row:
            blocks.add_node(root[v])
    for row in layers:
        for left, right in zip(row, row[1:]):
            a, b = root[left], root[right]
            weight = separation(left, right)
            if blocks.has_edge(a, b):
                blocks[a][b]["weight"] = max(blocks[a][b]["weight"], weight)
            else:
                blocks.add_edge(a, b, weight=weight)

    try:
        order = list(nx.topological_sort(blocks))
    except nx.NetworkXUnfeasible as e:
        raise InvariantViolation("block graph has a cycle; alignment crossed itself") from e

    bx: dict[int, float] = {}
    for b in order:
        bx[b] = max((bx[p] + blocks[p][b]["weight"] for p in blocks.predecessors(b)), default=0.0)
    return {v: bx[root[v]] for row in layers for v in row}


def balance(results: list[dict[int, float]]) -> dict[int, float]:
    """Combine the four directional results into one.

    ``results`` alternates left and right variants. Left variants are
    shifted so their minimum matches the narrowest result, right variants
    so their maximum does; each node then gets the mean of its two middle
    values.
    """
    widths = [max(xs.values()) - min(xs.values()) for xs in results]
    narrowest = results[widths.index(min(widths))]
    lo = min(narrowest.values())
    hi = max(narrowest.values())

    aligned: list[dict[int, float]] = []
    for i, xs in enumerate(results):
        shift = lo - min(xs.values()) if i % 2 == 0 else hi - max(xs.values())
        aligned.append({v: x + shift for v, x in xs.items()})

    combined: dict[int, float] = {}
    for v in results[0]:
        values = sorted(xs[v] for xs in aligned)
        mid = len(values) // 2
        combined[v] = (values[mid - 1] + values[mid]) / 2
    return combined


class BK:
    """Brandes–Köpf coordinate assignment over a placed VisualGraph."""

    def __init__(self, vg: VisualGraph) -> None:
        self.vg = vg
        self.margin = vg.config.node_margin

    def separation(self, left: int, right: int) -> float:
        """Minimum distance between the centres of two row neighbours."""
        return self.vg.element(left).width / 2 + self.margin + self.vg.element(right).width / 2

    def do_it(self) -> None:
        layers = [list(row) for row in self.vg.rows]
        if not any(layers):
            return

        conflicts = mark_type1_conflicts(self.vg, layers)
        results: list[dict[int, float]] = []
        for downward in (True, False):
            for leftward in (True, False):
                results.append(self.compute(layers, conflicts, downward, leftward))

        self.vg.logger.debug(
            "bk widths: %s",
            ", ".join(f"{max(xs.values()) - min(xs.values()):.1f}" for xs in results),
        )
        self.apply(balance(results))

    def compute(
        self,
        layers: Layers,
        conflicts: set[tuple[int, int]],
        downward: bool,
        leftward: bool,
    ) -> dict[int, float]:
        """Run alignment and compaction for one of the four directions."""
        view = layers if downward else layers[::-1]
        if not leftward:
            view = [row[::-1] for row in view]
        neighbors = self.vg.predecessors if downward else self.vg.successors

        root, _ = vertical_alignment(view, neighbors, conflicts)
        xs = horizontal_compaction(view, root, self.separation)
        if leftward:
            return xs
        return {v: -x for v, x in xs.items()}

    def apply(self, centers: dict[int, float]) -> None:
        """Write centres back as top-left x, keeping every row feasible."""
        for row in self.vg.rows:
            for prev, handle in zip(row, row[1:]):
                centers[handle] = max(centers[handle], centers[prev] + self.separation(prev, handle))

        left_edge = min(centers[h] - self.vg.element(h).width / 2 for h in centers)
        for handle, cx in centers.items():
            el = self.vg.element(handle)
            y = el.pos.y if el.pos is not None else 0.0
            el.pos = Point(cx - el.width / 2 - left_edge, y)
