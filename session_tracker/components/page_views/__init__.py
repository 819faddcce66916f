"""
Page view component - Current page-view slot and finalized page-view history.
"""

from .component import (
    DEFAULT_MIN_DURATION_SECONDS,
    PageViewAggregator,
    compute_duration_seconds,
    to_record,
)
from .models import PageView
from .ports import ClockPort, PageViewRulesPort, ScrollMonitorPort

__all__ = [
    # Aggregator
    "PageViewAggregator",
    "DEFAULT_MIN_DURATION_SECONDS",
    # Pure functions
    "compute_duration_seconds",
    "to_record",
    # Models
    "PageView",
    # Ports
    "ClockPort",
    "PageViewRulesPort",
    "ScrollMonitorPort",
]
