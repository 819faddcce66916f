"""Rounding and elapsed-time helpers shared by the page-view and scroll code."""

import math
from datetime import datetime


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def elapsed_seconds(start: datetime, end: datetime) -> float:
    """Seconds between two instants; negative when the clock went backwards."""
    return (end - start).total_seconds()


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
