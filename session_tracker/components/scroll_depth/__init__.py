"""
Scroll depth component - Maximum scroll percentage for the current page-view.
"""

from .component import (
    ScrollDepthMonitor,
    advance_depth,
    compute_scroll_percent,
)
from .models import ScrollPosition
from .ports import ScrollSourcePort, ScrollTarget

__all__ = [
    # Monitor
    "ScrollDepthMonitor",
    # Pure functions
    "advance_depth",
    "compute_scroll_percent",
    # Models
    "ScrollPosition",
    # Ports
    "ScrollSourcePort",
    "ScrollTarget",
]
