"""Tests for ir/graph.py and ir/elements.py — VisualGraph construction, handles,
orientation, and transpose."""

from __future__ import annotations

import math

import pytest

from layered_layout.errors import MalformedGraphError
from layered_layout.ir.elements import Arrow, Element, LineStyle, ShapeKind, StyleAttr
from layered_layout.ir.graph import VisualGraph
from layered_layout.types import Orientation, Point

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_box(w: float = 100.0, h: float = 100.0, label: str = "") -> Element:
    return Element.create(ShapeKind.Box, StyleAttr.simple(), Point(w, h), label)


def make_chain(n: int, orientation: Orientation = Orientation.TopToBottom) -> tuple[VisualGraph, list[int]]:
    vg = VisualGraph(orientation)
    handles = [vg.add_node(make_box(label=str(i))) for i in range(n)]
    for src, dst in zip(handles, handles[1:]):
        vg.add_edge(Arrow.simple(), src, dst)
    return vg, handles


# ─── Orientation ──────────────────────────────────────────────────────────────


class TestOrientation:
    def test_default_is_top_to_bottom(self):
        assert Orientation.default() == Orientation.TopToBottom

    def test_top_to_bottom_family(self):
        assert Orientation.TopToBottom.is_top_to_bottom()
        assert Orientation.BottomToTop.is_top_to_bottom()
        assert not Orientation.LeftToRight.is_top_to_bottom()
        assert Orientation.RightToLeft.is_left_to_right()

    def test_reversed_variants(self):
        assert Orientation.BottomToTop.is_reversed()
        assert Orientation.RightToLeft.is_reversed()
        assert not Orientation.TopToBottom.is_reversed()

    def test_transpose_is_involution(self):
        for o in Orientation:
            assert o.transpose().transpose() == o
            assert o.transpose() != o

    def test_transpose_keeps_reversal(self):
        assert Orientation.BottomToTop.transpose() == Orientation.RightToLeft
        assert Orientation.TopToBottom.transpose() == Orientation.LeftToRight


# ─── Elements ─────────────────────────────────────────────────────────────────


class TestElement:
    def test_create_copies_size(self):
        size = Point(10.0, 20.0)
        el = Element.create(ShapeKind.Box, StyleAttr.simple(), size)
        size.x = 99.0
        assert el.width == 10.0
        assert el.height == 20.0

    def test_position_starts_undefined(self):
        el = make_box()
        assert el.pos is None
        with pytest.raises(ValueError):
            el.center()

    def test_center_and_bbox(self):
        el = make_box(40.0, 20.0)
        el.pos = Point(10.0, 5.0)
        assert el.center() == Point(30.0, 15.0)
        assert el.bbox() == (Point(10.0, 5.0), Point(50.0, 25.0))

    def test_transpose_swaps_axes(self):
        el = make_box(40.0, 20.0)
        el.pos = Point(1.0, 2.0)
        el.transpose()
        assert el.size == Point(20.0, 40.0)
        assert el.pos == Point(2.0, 1.0)

    def test_connector_is_zero_sized(self):
        c = Element.connector()
        assert c.is_connector()
        assert c.size == Point(0.0, 0.0)


class TestArrow:
    def test_simple_defaults(self):
        a = Arrow.simple("x")
        assert a.label == "x"
        assert a.line_style == LineStyle.Normal
        assert a.heads == (False, True)
        assert not a.is_dashed()

    def test_dashed(self):
        assert Arrow.dashed().is_dashed()


# ─── Construction ─────────────────────────────────────────────────────────────


class TestConstruction:
    def test_new_graph_is_empty(self):
        vg = VisualGraph(Orientation.LeftToRight)
        assert vg.num_nodes() == 0
        assert vg.num_edges() == 0
        assert vg.orientation() == Orientation.LeftToRight

    def test_handles_are_sequential(self):
        vg = VisualGraph()
        assert [vg.add_node(make_box()) for _ in range(3)] == [0, 1, 2]

    def test_add_edge_records_endpoints(self):
        vg, (a, b) = make_chain(2)
        arrow = vg.arrow(0)
        assert (arrow.src, arrow.dst) == (a, b)
        assert vg.successors(a) == [b]
        assert vg.predecessors(b) == [a]

    def test_iter_nodes_in_handle_order(self):
        vg, handles = make_chain(4)
        assert [h for h, _ in vg.iter_nodes()] == handles

    def test_handles_not_reused_after_layout(self):
        vg = VisualGraph()
        a = vg.add_node(make_box())
        b = vg.add_node(make_box())
        c = vg.add_node(make_box())
        vg.add_edge(Arrow.simple(), a, b)
        vg.add_edge(Arrow.simple(), b, c)
        vg.add_edge(Arrow.simple(), a, c)
        vg.prepare_render()
        existing = [h for h, _ in vg.iter_all_nodes()]
        d = vg.add_node(make_box())
        assert d > max(existing)
        assert vg.num_nodes() == 4


class TestMalformedInput:
    def test_unknown_source_handle(self):
        vg, (a, _) = make_chain(2)
        with pytest.raises(MalformedGraphError, match="99"):
            vg.add_edge(Arrow.simple(), 99, a)

    def test_unknown_destination_handle(self):
        vg, (a, _) = make_chain(2)
        with pytest.raises(MalformedGraphError, match="7"):
            vg.add_edge(Arrow.simple(), a, 7)

    def test_self_loop_rejected(self):
        vg, (a, _) = make_chain(2)
        with pytest.raises(MalformedGraphError, match="self-loop"):
            vg.add_edge(Arrow.simple(), a, a)

    def test_cycle_rejected(self):
        vg, handles = make_chain(3)
        with pytest.raises(MalformedGraphError, match="cycle"):
            vg.add_edge(Arrow.simple(), handles[2], handles[0])
        assert vg.num_edges() == 2

    def test_negative_size_rejected(self):
        vg = VisualGraph()
        with pytest.raises(MalformedGraphError):
            vg.add_node(make_box(-1.0, 10.0))

    def test_non_finite_size_rejected(self):
        vg = VisualGraph()
        with pytest.raises(MalformedGraphError):
            vg.add_node(make_box(math.nan, 10.0))
        with pytest.raises(MalformedGraphError):
            vg.add_node(make_box(10.0, math.inf))

    def test_same_element_twice_rejected(self):
        vg = VisualGraph()
        el = make_box(10.0, 10.0)
        vg.add_node(el)
        with pytest.raises(MalformedGraphError, match="already part"):
            vg.add_node(el)
        assert vg.num_nodes() == 1
        vg.prepare_render()

    def test_same_arrow_twice_rejected(self):
        vg = VisualGraph()
        a, b, c = (vg.add_node(make_box()) for _ in range(3))
        arrow = Arrow.simple()
        vg.add_edge(arrow, a, b)
        with pytest.raises(MalformedGraphError, match="already part"):
            vg.add_edge(arrow, b, c)
        assert (arrow.src, arrow.dst) == (a, b)
        assert vg.num_edges() == 1
        assert not vg.dag.has_edge(b, c)

    def test_equal_but_distinct_records_accepted(self):
        vg = VisualGraph()
        a = vg.add_node(make_box(10.0, 10.0))
        b = vg.add_node(make_box(10.0, 10.0))
        vg.add_edge(Arrow.simple(), a, b)
        vg.add_edge(Arrow.simple(), a, b)
        assert vg.num_edges() == 2

    def test_is_value_error(self):
        vg = VisualGraph()
        with pytest.raises(ValueError):
            vg.add_node(make_box(-5.0, -5.0))

    def test_zero_size_accepted(self):
        vg = VisualGraph()
        assert vg.add_node(make_box(0.0, 0.0)) == 0


# ─── Transpose ────────────────────────────────────────────────────────────────


class TestTranspose:
    def test_transpose_twice_is_identity(self):
        vg, handles = make_chain(3)
        vg.prepare_render()
        before = {h: (vg.element(h).pos.x, vg.element(h).pos.y) for h in handles}
        paths = [list(a.path) for _, a in vg.iter_edges()]

        vg.transpose()
        assert vg.orientation() == Orientation.LeftToRight
        vg.transpose()

        assert vg.orientation() == Orientation.TopToBottom
        assert {h: (vg.element(h).pos.x, vg.element(h).pos.y) for h in handles} == before
        assert [a.path for _, a in vg.iter_edges()] == paths

    def test_transpose_swaps_positions_and_paths(self):
        vg, (a, b) = make_chain(2)
        vg.prepare_render()
        pos = vg.element(b).pos
        first = vg.arrow(0).path[0]
        vg.transpose()
        assert vg.element(b).pos == Point(pos.y, pos.x)
        assert vg.arrow(0).path[0] == Point(first.y, first.x)

    def test_transpose_before_layout(self):
        vg, (a, _) = make_chain(2)
        vg.element(a).size = Point(10.0, 30.0)
        vg.transpose()
        assert vg.element(a).pos is None
        assert vg.element(a).size == Point(30.0, 10.0)
