"""
Sessions component - Session lifecycle manager and host-facing tracker API.
"""

from .component import LOCAL_HOSTNAMES, SessionTracker, classify_internal
from .models import NO_SESSION, ActiveSession, NoSession, SessionState
from .ports import (
    ClockPort,
    DispatcherPort,
    HostEnvironmentPort,
    SessionStorePort,
    TimerPort,
    TrackerRulesPort,
)

__all__ = [
    # Tracker
    "SessionTracker",
    # Pure functions
    "classify_internal",
    "LOCAL_HOSTNAMES",
    # Models
    "ActiveSession",
    "NoSession",
    "NO_SESSION",
    "SessionState",
    # Ports
    "ClockPort",
    "DispatcherPort",
    "HostEnvironmentPort",
    "SessionStorePort",
    "TimerPort",
    "TrackerRulesPort",
]
