"""Centralized configuration for layered-layout."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LayoutConfig:
    """Configuration for the layout pipeline."""

    node_margin: float = 15.0
    row_margin: float = 40.0
    max_row_passes: int = 8
    connector_size: float = 0.0
