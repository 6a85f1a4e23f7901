"""Rank preparation: bind every node to a row before placement.

Phases:
  1. Drop connectors left over from a previous layout run
  2. Longest-path rank assignment over the DAG
  3. Row construction (handle order within each row)
  4. Long-edge splitting into connector chains
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:
    from layered_layout.ir.graph import VisualGraph


def assign_ranks(dag: nx.DiGraph) -> dict[int, int]:
    """Give every node the length of the longest path reaching it."""
    ranks: dict[int, int] = {node: 0 for node in dag.nodes}
    for node in nx.topological_sort(dag):
        for succ in dag.successors(node):
            if ranks[succ] < ranks[node] + 1:
                ranks[succ] = ranks[node] + 1
    return ranks


def build_rows(ranks: dict[int, int], handles: list[int]) -> list[list[int]]:
    row_count = (max(ranks.values()) + 1) if ranks else 0
    rows: list[list[int]] = [[] for _ in range(row_count)]
    for handle in handles:
        rows[ranks[handle]].append(handle)
    return rows


def relative_position(vg: VisualGraph, handle: int) -> float:
    """Position of ``handle`` inside its row, scaled to (0, 1)."""
    row = vg.rows[vg.rank_of(handle)]
    return (row.index(handle) + 0.5) / len(row)


def interpolated_index(rel: float, row_len: int) -> int:
    return max(0, min(row_len, int(rel * row_len + 0.5)))


def split_long_edges(vg: VisualGraph) -> int:
    """Replace every edge spanning more than one rank by a connector chain.

    Each connector is inserted into its row at the position interpolated
    between the endpoints' relative positions. Returns the number of
    connectors created.
    """
    created = 0
    for _, arrow in vg.iter_edges():
        src_rank = vg.rank_of(arrow.src)
        dst_rank = vg.rank_of(arrow.dst)
        span = dst_rank - src_rank
        if span <= 1:
            continue

        if vg.dag.has_edge(arrow.src, arrow.dst):
            vg.dag.remove_edge(arrow.src, arrow.dst)

        src_rel = relative_position(vg, arrow.src)
        dst_rel = relative_position(vg, arrow.dst)
        chain_prev = arrow.src
        via: list[int] = []
        for rank in range(src_rank + 1, dst_rank):
            t = (rank - src_rank) / span
            rel = src_rel + (dst_rel - src_rel) * t
            index = interpolated_index(rel, len(vg.rows[rank]))
            connector = vg.add_connector(rank, index)
            vg.dag.add_edge(chain_prev, connector)
            via.append(connector)
            chain_prev = connector
            created += 1
        vg.dag.add_edge(chain_prev, arrow.dst)
        arrow.via = via
    return created


def prepare_ranks(vg: VisualGraph) -> None:
    """Assign ranks, build rows, and split long edges from scratch."""
    vg.remove_connectors()
    ranks = assign_ranks(vg.dag)
    handles = [handle for handle, _ in vg.iter_all_nodes()]
    vg.set_rows(build_rows(ranks, handles))
    created = split_long_edges(vg)
    vg.logger.debug("prepared %d rows, %d connectors", len(vg.rows), created)
