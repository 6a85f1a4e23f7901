"""Layout pipeline: rank preparation, placement phases, and the Placer."""

from __future__ import annotations

from layered_layout.layout.bk import BK, balance, horizontal_compaction, mark_type1_conflicts, vertical_alignment
from layered_layout.layout.placer import Placer
from layered_layout.layout.ranking import assign_ranks, build_rows, prepare_ranks, split_long_edges

__all__ = [
    "BK",
    "Placer",
    "assign_ranks",
    "balance",
    "build_rows",
    "horizontal_compaction",
    "mark_type1_conflicts",
    "prepare_ranks",
    "split_long_edges",
    "vertical_alignment",
]
