"""
Scroll depth monitor models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScrollPosition:
    """One scroll tick as reported by the host."""

    scroll_top: float
    scroll_height: float
    viewport_height: float

    @property
    def scrollable_height(self) -> float:
        # Never below 1 so short pages do not divide by zero.
        return max(1.0, self.scroll_height - self.viewport_height)
