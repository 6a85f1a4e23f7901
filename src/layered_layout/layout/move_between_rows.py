"""Row reconciliation: move nodes between rows to shorten edges.

The badness metric is the total rank span of all edges. For a node with
``k`` incoming and ``m`` outgoing arrows (parallel arrows counted one by
one) the metric is linear in the node's rank with slope ``k - m``, so the
best rank inside the feasible range is always one of its ends. Moves never leave the feasible range, so no edge
ever points backward.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from layered_layout.layout.ranking import interpolated_index, relative_position, split_long_edges

if TYPE_CHECKING:
    from layered_layout.ir.graph import VisualGraph


def edge_span_total(vg: VisualGraph) -> int:
    return sum(vg.rank_of(a.dst) - vg.rank_of(a.src) for _, a in vg.iter_edges())


def _arrow_degrees(vg: VisualGraph) -> tuple[Counter[int], Counter[int]]:
    """In- and out-degree of every node counted over arrows, not dag edges."""
    incoming: Counter[int] = Counter()
    outgoing: Counter[int] = Counter()
    for _, a in vg.iter_edges():
        incoming[a.dst] += 1
        outgoing[a.src] += 1
    return incoming, outgoing


def _best_rank(vg: VisualGraph, handle: int, slope: int) -> int | None:
    """Return the rank ``handle`` should move to, or None to stay put."""
    if slope == 0:
        return None
    preds = vg.predecessors(handle)
    succs = vg.successors(handle)
    lo = max((vg.rank_of(p) for p in preds), default=-1) + 1
    hi = min((vg.rank_of(s) for s in succs), default=len(vg.rows)) - 1
    target = hi if slope < 0 else lo
    if target == vg.rank_of(handle):
        return None
    return target


def _insertion_index(vg: VisualGraph, handle: int, rank: int) -> int:
    """Index in row ``rank`` next to the node's neighbours in adjacent rows."""
    adjacent = [p for p in vg.predecessors(handle) if vg.rank_of(p) == rank - 1]
    adjacent += [s for s in vg.successors(handle) if vg.rank_of(s) == rank + 1]
    row_len = len(vg.rows[rank])
    if not adjacent:
        return row_len
    rel = sum(relative_position(vg, n) for n in adjacent) / len(adjacent)
    return interpolated_index(rel, row_len)


def do_it(vg: VisualGraph, max_passes: int | None = None) -> int:
    """Move nodes between rows until no move improves the edge span total.

    Connector chains are dropped before the moves and rebuilt afterwards so
    they match the final ranks. Returns the number of moves performed.
    """
    passes = max_passes if max_passes is not None else vg.config.max_row_passes
    vg.remove_connectors()
    before = edge_span_total(vg)
    incoming, outgoing = _arrow_degrees(vg)

    total_moves = 0
    for pass_idx in range(passes):
        moved = 0
        for handle, _ in list(vg.iter_nodes()):
            target = _best_rank(vg, handle, incoming[handle] - outgoing[handle])
            if target is None:
                continue
            vg.move_node(handle, target, _insertion_index(vg, handle, target))
            moved += 1
        total_moves += moved
        if moved == 0:
            break
        vg.logger.debug("row pass %d moved %d nodes", pass_idx, moved)
    else:
        if passes:
            vg.logger.debug("row reconciliation stopped at the %d-pass cap", passes)

    vg.drop_empty_rows()
    vg.logger.debug("edge span total %d -> %d", before, edge_span_total(vg))
    split_long_edges(vg)
    return total_moves
