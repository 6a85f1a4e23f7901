"""Graph model: elements, arrows, and the VisualGraph arena."""

from layered_layout.ir.elements import Arrow, Element, LineStyle, ShapeKind, StyleAttr
from layered_layout.ir.graph import VisualGraph

__all__ = [
    "Arrow",
    "Element",
    "LineStyle",
    "ShapeKind",
    "StyleAttr",
    "VisualGraph",
]
