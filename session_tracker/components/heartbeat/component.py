"""
Heartbeat scheduler - recurring and last-chance flush triggers.

Fires on a fixed interval and whenever the host reports it is going away
(visibility becomes hidden, unload). The scheduler only decides *when*; the
flush itself belongs to the session tracker.

Invariants:
- At most one timer and one pair of lifecycle subscriptions at a time
- start() cancels anything already running before scheduling again
- stop() is idempotent and leaves no live subscription behind
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from session_tracker.domain.entities import VisibilityState
from session_tracker.ports.subscription import Subscription

from .models import HeartbeatTrigger
from .ports import HeartbeatRulesPort, LifecycleSignalsPort, TimerPort

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30.0

BeatCallback = Callable[[HeartbeatTrigger], None]


class HeartbeatScheduler:
    def __init__(
        self,
        timer: TimerPort,
        signals: LifecycleSignalsPort,
        rules: HeartbeatRulesPort | None = None,
    ) -> None:
        self._timer = timer
        self._signals = signals
        self._interval = (
            rules.get_interval_seconds() if rules is not None else DEFAULT_INTERVAL_SECONDS
        )
        self._on_beat: BeatCallback | None = None
        self._subscriptions: list[Subscription] = []

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return bool(self._subscriptions)

    def start(self, on_beat: BeatCallback) -> None:
        """
        Begin firing on_beat; any previous schedule is cancelled first.

        If any subscription fails, the ones already made are cancelled and
        the error is re-raised, leaving the scheduler stopped.
        """
        self.stop()
        self._on_beat = on_beat
        try:
            self._subscriptions.append(self._timer.call_every(self._interval, self._on_interval))
            self._subscriptions.append(
                self._signals.on_visibility_change(self._on_visibility_change)
            )
            self._subscriptions.append(self._signals.on_unload(self._on_unload))
        except Exception:
            self.stop()
            self._on_beat = None
            raise
        logger.debug("Heartbeat started (interval: %.1fs)", self._interval)

    def stop(self) -> None:
        if not self._subscriptions:
            return
        for subscription in self._subscriptions:
            try:
                subscription.unsubscribe()
            except Exception:
                logger.exception("Error cancelling heartbeat subscription")
        self._subscriptions = []
        self._on_beat = None
        logger.debug("Heartbeat stopped")

    def _fire(self, trigger: HeartbeatTrigger) -> None:
        on_beat = self._on_beat
        if on_beat is None:
            return
        on_beat(trigger)

    def _on_interval(self) -> None:
        self._fire(HeartbeatTrigger.INTERVAL)

    def _on_visibility_change(self, state: VisibilityState) -> None:
        if state == "hidden":
            self._fire(HeartbeatTrigger.VISIBILITY_HIDDEN)

    def _on_unload(self) -> None:
        self._fire(HeartbeatTrigger.UNLOAD)
