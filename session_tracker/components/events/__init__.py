"""
Events component - Fire-and-forget named event reporting.
"""

from .component import EventSink
from .ports import ClockPort, DispatcherPort, EventStorePort

__all__ = [
    "EventSink",
    "ClockPort",
    "DispatcherPort",
    "EventStorePort",
]
