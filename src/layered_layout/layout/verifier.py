"""Check that spatial order inside each row matches the logical row order."""

from __future__ import annotations

from typing import TYPE_CHECKING

from layered_layout.errors import InvariantViolation

if TYPE_CHECKING:
    from layered_layout.ir.graph import VisualGraph

EPSILON: float = 1e-6


def do_it(vg: VisualGraph, margin: float | None = None) -> None:
    """Raise InvariantViolation unless every row is ordered and non-overlapping.

    For each adjacent pair ``(a, b)`` in a row, ``a.x + a.width + margin``
    must not exceed ``b.x``.
    """
    if margin is None:
        margin = vg.config.node_margin

    seen = 0
    for rank, row in enumerate(vg.rows):
        prev = None
        for handle in row:
            seen += 1
            if vg.rank_of(handle) != rank:
                raise InvariantViolation(f"node {handle} is in row {rank} but recorded at rank {vg.rank_of(handle)}")
            el = vg.element(handle)
            if el.pos is None:
                raise InvariantViolation(f"node {handle} in row {rank} has no position")
            if prev is not None:
                left = vg.element(prev)
                if left.pos.x + left.width + margin > el.pos.x + EPSILON:
                    raise InvariantViolation(
                        f"row {rank}: node {prev} (x={left.pos.x:.3f}, w={left.width:.3f}) "
                        f"is not left of node {handle} (x={el.pos.x:.3f})"
                    )
            prev = handle

    total = sum(1 for _ in vg.iter_all_nodes())
    if seen != total:
        raise InvariantViolation(f"{total} nodes in the graph but {seen} placed in rows")
