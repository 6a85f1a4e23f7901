"""Edge routing against final node coordinates.

Works in top-to-bottom coordinates: a path leaves the middle of the
source's bottom side, passes through the centre of each connector on its
chain, and enters the middle of the destination's top side.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from layered_layout.types import Point

if TYPE_CHECKING:
    from layered_layout.ir.elements import Element
    from layered_layout.ir.graph import VisualGraph


def exit_point(el: Element) -> Point:
    c = el.center()
    return Point(c.x, el.pos.y + el.height)


def entry_point(el: Element) -> Point:
    c = el.center()
    return Point(c.x, el.pos.y)


def do_it(vg: VisualGraph) -> None:
    for _, arrow in vg.iter_edges():
        path = [exit_point(vg.element(arrow.src))]
        path += [vg.element(c).center() for c in arrow.via]
        path.append(entry_point(vg.element(arrow.dst)))
        arrow.path = path


def straight(vg: VisualGraph) -> None:
    """Route every edge as a single boundary-to-boundary segment."""
    for _, arrow in vg.iter_edges():
        arrow.path = [exit_point(vg.element(arrow.src)), entry_point(vg.element(arrow.dst))]
