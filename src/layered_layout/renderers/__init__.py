"""Render interface and the bundled trace backend."""

from layered_layout.renderers.base import ClipHandle, RenderBackend
from layered_layout.renderers.trace import TraceWriter

__all__ = ["ClipHandle", "RenderBackend", "TraceWriter"]
