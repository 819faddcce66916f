"""
Dispatcher adapters (DispatcherPort implementations).

Persistence calls are fire-and-forget: a failure is logged here and never
reaches the code that submitted it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

logger = logging.getLogger(__name__)


def _describe(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", repr(fn))


class InlineDispatcher:
    """Runs each call immediately on the caller's thread, swallowing failures."""

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        try:
            fn(*args, **kwargs)
        except Exception:
            logger.exception("Persistence call %s failed", _describe(fn))

    def shutdown(self) -> None:
        pass


class ThreadPoolDispatcher:
    """
    Runs calls on a background executor.

    With the default single worker, calls leave in the order they were
    submitted; completion order against the backend is still not guaranteed.
    """

    def __init__(self, max_workers: int = 1) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="session-tracker-io"
        )
        self._closed = False

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        if self._closed:
            logger.warning("Dispatcher closed; dropping %s", _describe(fn))
            return
        try:
            future = self._executor.submit(fn, *args, **kwargs)
        except RuntimeError:
            # shutdown() won the race from another thread
            logger.warning("Dispatcher shut down; dropping %s", _describe(fn))
            return
        future.add_done_callback(_failure_logger(fn))

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; by default wait for in-flight calls."""
        self._closed = True
        self._executor.shutdown(wait=wait)


def _failure_logger(fn: Callable[..., Any]) -> Callable[[Future[Any]], None]:
    def _log_failure(future: Future[Any]) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Persistence call %s failed", _describe(fn), exc_info=exc)

    return _log_failure
