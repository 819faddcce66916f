"""
Rules adapter - exposes TrackerRules through the component rules ports.
"""

from __future__ import annotations

from session_tracker.rules.models import TrackerRules


class RulesAdapter:
    """Satisfies TrackerRulesPort (and the heartbeat/page-view rules ports)."""

    def __init__(self, rules: TrackerRules) -> None:
        self._rules = rules

    @property
    def rules(self) -> TrackerRules:
        return self._rules

    def is_enabled(self) -> bool:
        return self._rules.enabled

    def get_interval_seconds(self) -> float:
        return self._rules.heartbeat.interval_seconds

    def get_min_duration_seconds(self) -> int:
        return self._rules.page_views.min_duration_seconds

    def get_internal_email_prefixes(self) -> tuple[str, ...]:
        return tuple(self._rules.internal_users.email_prefixes)

    def get_internal_email_suffixes(self) -> tuple[str, ...]:
        return tuple(self._rules.internal_users.email_suffixes)

    def get_internal_hostnames(self) -> tuple[str, ...]:
        return tuple(self._rules.internal_users.hostnames)
