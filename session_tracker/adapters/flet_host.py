"""
Flet host adapter.

Binds a flet Page (and optionally a scrollable control) to the tracker's
host signals:
- app lifecycle HIDE / INACTIVE -> visibility "hidden", SHOW / RESUME -> "visible"
- page disconnect               -> unload
- on_scroll of the control      -> scroll tick (pixels, extent + viewport, viewport)

Handlers already installed on the page are kept and still called.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import urlparse

import flet as ft

from session_tracker.adapters.host import CallbackHost
from session_tracker.domain.entities import ClientMetadata

logger = logging.getLogger(__name__)

_HIDDEN_STATES = (ft.AppLifecycleState.HIDE, ft.AppLifecycleState.INACTIVE)
_VISIBLE_STATES = (ft.AppLifecycleState.SHOW, ft.AppLifecycleState.RESUME)


def _chain(
    own: Callable[[Any], None], previous: Callable[[Any], None] | None
) -> Callable[[Any], None]:
    if previous is None:
        return own

    def handler(e: Any) -> None:
        own(e)
        previous(e)

    return handler


def _as_int(value: Any) -> int | None:
    return int(value) if value is not None else None


class FletHost(CallbackHost):
    def __init__(self, page: ft.Page, scroll_control: Any | None = None) -> None:
        super().__init__()
        self._page = page
        self._scroll_control = scroll_control if scroll_control is not None else page
        self._bind()

    def _bind(self) -> None:
        page = self._page
        page.on_app_lifecycle_state_change = _chain(
            self._handle_lifecycle, page.on_app_lifecycle_state_change
        )
        page.on_disconnect = _chain(self._handle_disconnect, page.on_disconnect)
        control = self._scroll_control
        control.on_scroll = _chain(self._handle_scroll, control.on_scroll)

    # --- HostEnvironmentPort ---

    def client_metadata(self) -> ClientMetadata:
        page = self._page
        platform = page.platform
        return ClientMetadata(
            user_agent=page.client_user_agent,
            platform=platform.value if isinstance(platform, ft.PagePlatform) else platform,
            screen_width=_as_int(page.width),
            screen_height=_as_int(page.height),
            hostname=urlparse(page.url).hostname if page.url else None,
        )

    def current_route(self) -> str | None:
        return self._page.route or None

    # --- Flet handlers ---

    def _handle_lifecycle(self, e: Any) -> None:
        if e.state in _HIDDEN_STATES:
            self._visibility.emit("hidden")
        elif e.state in _VISIBLE_STATES:
            self._visibility.emit("visible")

    def _handle_disconnect(self, e: Any) -> None:
        logger.debug("Flet page disconnected; emitting unload")
        self._unload.emit()

    def _handle_scroll(self, e: Any) -> None:
        viewport = e.viewport_dimension
        self._scroll.emit(e.pixels, e.max_scroll_extent + viewport, viewport)
