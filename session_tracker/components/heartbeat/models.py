"""
Heartbeat scheduler models.
"""

from __future__ import annotations

from enum import Enum


class HeartbeatTrigger(str, Enum):
    """Why a heartbeat flush happened."""

    INTERVAL = "interval"
    VISIBILITY_HIDDEN = "visibility_hidden"
    UNLOAD = "unload"
