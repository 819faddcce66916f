"""
In-process host environment adapters (HostEnvironmentPort).

CallbackHost keeps one listener registry per signal and hands out explicit
subscription handles. ManualHost is the plain-Python host used by services,
CLIs and tests: the embedding code calls emit_* when something happens.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from session_tracker.domain.entities import ClientMetadata, VisibilityState

logger = logging.getLogger(__name__)


class CallbackSubscription:
    """Removes one listener from its registry on unsubscribe()."""

    def __init__(self, registry: ListenerRegistry, listener: Callable[..., None]) -> None:
        self._registry = registry
        self._listener = listener
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._registry.remove(self._listener)


class ListenerRegistry:
    """Ordered listeners for one signal. A failing listener never stops the others."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[Callable[..., None]] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._listeners)

    def add(self, listener: Callable[..., None]) -> CallbackSubscription:
        with self._lock:
            self._listeners.append(listener)
        return CallbackSubscription(self, listener)

    def remove(self, listener: Callable[..., None]) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def emit(self, *args: Any) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(*args)
            except Exception:
                logger.exception("Error in %s listener", self.name)


class CallbackHost:
    """Base host: subclasses supply metadata and routes, and call the registries."""

    def __init__(self) -> None:
        self._scroll = ListenerRegistry("scroll")
        self._visibility = ListenerRegistry("visibilitychange")
        self._unload = ListenerRegistry("unload")

    def client_metadata(self) -> ClientMetadata:
        return ClientMetadata()

    def current_route(self) -> str | None:
        return None

    def on_scroll(
        self, callback: Callable[[float, float, float], None]
    ) -> CallbackSubscription:
        return self._scroll.add(callback)

    def on_visibility_change(
        self, callback: Callable[[VisibilityState], None]
    ) -> CallbackSubscription:
        return self._visibility.add(callback)

    def on_unload(self, callback: Callable[[], None]) -> CallbackSubscription:
        return self._unload.add(callback)

    def listener_count(self, signal: str) -> int:
        """Live listeners for 'scroll', 'visibilitychange' or 'unload'."""
        registries = {r.name: r for r in (self._scroll, self._visibility, self._unload)}
        return len(registries[signal])


class ManualHost(CallbackHost):
    def __init__(
        self,
        metadata: ClientMetadata | None = None,
        route: str | None = None,
    ) -> None:
        super().__init__()
        self._metadata = metadata or ClientMetadata()
        self._route = route

    def client_metadata(self) -> ClientMetadata:
        return self._metadata

    def current_route(self) -> str | None:
        return self._route

    def set_route(self, route: str | None) -> None:
        self._route = route

    def emit_scroll(self, scroll_top: float, scroll_height: float, viewport_height: float) -> None:
        self._scroll.emit(scroll_top, scroll_height, viewport_height)

    def emit_visibility(self, state: VisibilityState) -> None:
        self._visibility.emit(state)

    def emit_unload(self) -> None:
        self._unload.emit()
