"""
Design Runtime v1.0

Presentation-side state around the Network Design Kernel: the current
immutable design, a mutable layout overlay, drift and metrics.
"""

from .layout import LayoutOverlay
from .session import DesignSession
from .drift import compare_designs
from .observability import DesignMetrics, collect_metrics

__all__ = [
    "LayoutOverlay",
    "DesignSession",
    "compare_designs",
    "DesignMetrics",
    "collect_metrics",
]
