"""Placer — assigns the final (x, y) coordinates of every element.

Phases (all run in top-to-bottom coordinates):
  1. Transpose in (left-to-right orientations)
  2. Row reconciliation
  3. Simple placement
  4. Verification
  5. Brandes–Köpf refinement, verification, edge routing
  6. Mirror (bottom-to-top / right-to-left orientations)
  7. Transpose out
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from layered_layout.layout import edge_fixer, move_between_rows, simple, verifier
from layered_layout.layout.bk import BK
from layered_layout.types import Point

if TYPE_CHECKING:
    from layered_layout.ir.graph import VisualGraph

_log = logging.getLogger(__name__)


class Placer:
    """Run the placement pipeline on a graph whose rows are prepared."""

    def __init__(self, vg: VisualGraph, logger: logging.Logger | None = None) -> None:
        self.vg = vg
        self.logger = logger if logger is not None else _log

    def layout(self, skip_refinement: bool = False) -> None:
        vg = self.vg
        self.logger.info("Starting layout of %d nodes.", vg.num_nodes())

        # Left-to-right layouts reuse the top-to-bottom pipeline.
        need_transpose = not vg.orientation().is_top_to_bottom()
        reversed_ranks = vg.orientation().is_reversed()
        if need_transpose:
            self.logger.info("Placing nodes in left-to-right mode.")
            vg.transpose()
        else:
            self.logger.info("Placing nodes in top-to-bottom mode.")

        move_between_rows.do_it(vg)
        simple.do_it(vg)
        self._trace("simple")
        verifier.do_it(vg)

        if skip_refinement:
            self.logger.info("Skipping the refinement phase.")
            edge_fixer.straight(vg)
        else:
            BK(vg).do_it()
            self._trace("bk")
            verifier.do_it(vg)
            edge_fixer.do_it(vg)

        if reversed_ranks:
            self._mirror()
        if need_transpose:
            vg.transpose()

    def _mirror(self) -> None:
        """Flip the rank axis so rank 0 ends up at the bottom."""
        vg = self.vg
        placed = [el for _, el in vg.iter_all_nodes() if el.pos is not None]
        extent = max((el.pos.y + el.height for el in placed), default=0.0)
        for el in placed:
            el.pos = Point(el.pos.x, extent - el.pos.y - el.height)
        for _, arrow in vg.iter_edges():
            arrow.path = [Point(p.x, extent - p.y) for p in arrow.path]

    def _trace(self, phase: str) -> None:
        if not self.vg.debug:
            return
        for rank, row in enumerate(self.vg.rows):
            cells = []
            for handle in row:
                el = self.vg.element(handle)
                cells.append(f"{handle}@({el.pos.x:.1f},{el.pos.y:.1f})")
            self.logger.debug("%s row %d: %s", phase, rank, " ".join(cells))
