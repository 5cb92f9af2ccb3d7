"""Lifecycle observer protocol contract."""

from typing import Protocol, runtime_checkable

from ..events import LifecycleEvent


@runtime_checkable
class LifecycleObserver(Protocol):
    """Protocol for subscribers to machine lifecycle events.

    Observers are called synchronously while a transition is published, so
    they must not block.
    """

    def notify(self, event: LifecycleEvent) -> None:
        """Receive a lifecycle event."""
        ...
