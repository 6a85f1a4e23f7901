"""First-pass coordinate assignment.

Nodes are packed left-to-right in row order and each row is stacked below
the previous one. Within a row every node is centred on the row's middle
line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from layered_layout.types import Point

if TYPE_CHECKING:
    from layered_layout.ir.graph import VisualGraph


def row_heights(vg: VisualGraph) -> list[float]:
    return [max((vg.element(h).height for h in row), default=0.0) for row in vg.rows]


def row_tops(vg: VisualGraph) -> list[float]:
    """Top y coordinate of each row."""
    tops: list[float] = []
    y = 0.0
    for height in row_heights(vg):
        tops.append(y)
        y += height + vg.config.row_margin
    return tops


def align_rows(vg: VisualGraph) -> None:
    """Set every node's y so it is centred in its row; x is left alone."""
    for row, top, height in zip(vg.rows, row_tops(vg), row_heights(vg)):
        for handle in row:
            el = vg.element(handle)
            x = el.pos.x if el.pos is not None else 0.0
            el.pos = Point(x, top + (height - el.height) / 2)


def do_it(vg: VisualGraph) -> None:
    margin = vg.config.node_margin
    align_rows(vg)
    for row in vg.rows:
        x = 0.0
        for handle in row:
            el = vg.element(handle)
            el.pos = Point(x, el.pos.y)
            x += el.width + margin
