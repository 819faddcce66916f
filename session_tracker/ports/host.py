"""
Host environment port.

Everything the tracker observes about the running application arrives
through here: scroll ticks, visibility changes, unload, the current route
and a static description of the client.
"""

from collections.abc import Callable
from typing import Protocol

from session_tracker.domain.entities import ClientMetadata, VisibilityState
from session_tracker.ports.subscription import Subscription

ScrollCallback = Callable[[float, float, float], None]
"""Called with (scroll_top, scroll_height, viewport_height)."""


class HostEnvironmentPort(Protocol):
    def client_metadata(self) -> ClientMetadata:
        ...

    def current_route(self) -> str | None:
        """Route the host is showing right now, if it knows one."""
        ...

    def on_visibility_change(
        self, callback: Callable[[VisibilityState], None]
    ) -> Subscription:
        ...

    def on_unload(self, callback: Callable[[], None]) -> Subscription:
        ...

    def on_scroll(self, callback: ScrollCallback) -> Subscription:
        ...
