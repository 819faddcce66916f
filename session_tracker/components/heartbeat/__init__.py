"""
Heartbeat component - Interval and lifecycle-triggered flush scheduling.
"""

from .component import DEFAULT_INTERVAL_SECONDS, BeatCallback, HeartbeatScheduler
from .models import HeartbeatTrigger
from .ports import HeartbeatRulesPort, LifecycleSignalsPort, TimerPort

__all__ = [
    "HeartbeatScheduler",
    "BeatCallback",
    "DEFAULT_INTERVAL_SECONDS",
    "HeartbeatTrigger",
    # Ports
    "HeartbeatRulesPort",
    "LifecycleSignalsPort",
    "TimerPort",
]
