"""Lifecycle event fan-out to observers."""

import logging
from typing import Iterable, List, Optional

from ..core.events import LifecycleEvent
from ..core.protocols import LifecycleObserver

logger = logging.getLogger(__name__)


class LifecycleEventBus:
    """Publishes machine lifecycle events to subscribed observers.

    A failing observer is logged and skipped; it never affects the
    transition that produced the event.
    """

    def __init__(self, observers: Optional[Iterable[LifecycleObserver]] = None):
        self._observers: List[LifecycleObserver] = list(observers or [])

    @property
    def observers(self) -> List[LifecycleObserver]:
        return list(self._observers)

    def subscribe(self, observer: LifecycleObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: LifecycleObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def publish(self, event: LifecycleEvent) -> None:
        for observer in list(self._observers):
            try:
                observer.notify(event)
            except Exception:
                logger.exception(
                    "Lifecycle observer %r failed on %s", observer, event.event_type
                )
