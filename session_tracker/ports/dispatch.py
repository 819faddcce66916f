from collections.abc import Callable
from typing import Any, Protocol


class DispatcherPort(Protocol):
    """Fire-and-forget executor for persistence calls."""

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Schedule fn; the caller never waits for or observes the result."""
        ...

    def shutdown(self) -> None:
        ...
