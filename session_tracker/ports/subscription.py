from typing import Protocol


class Subscription(Protocol):
    """Handle returned by every attach/schedule call."""

    def unsubscribe(self) -> None:
        """Stop delivering callbacks. Calling twice is harmless."""
        ...

    @property
    def active(self) -> bool:
        ...
