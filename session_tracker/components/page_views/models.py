"""
Page view aggregator models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PageView:
    """
    The open ("current") page-view.

    Mutable on purpose: the scroll monitor raises scroll_depth_percent while
    the view is current. Once finalized it is turned into an immutable
    PageViewRecord and this object is dropped.
    """

    page: str
    entered_at: datetime
    scroll_depth_percent: int = 0
