"""Exceptions raised by the graph model and the layout pipeline."""

from __future__ import annotations


class LayoutError(Exception):
    """Base class for all layered-layout errors."""


class MalformedGraphError(LayoutError, ValueError):
    """Raised at construction time when a node or edge is invalid."""


class InvariantViolation(LayoutError, RuntimeError):
    """Raised when a layout phase leaves rank/order bookkeeping inconsistent.

    This always indicates a bug in a layout phase, never bad input.
    """
