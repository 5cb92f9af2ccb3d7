"""Lifecycle observer that writes events to the standard logger."""

import logging
from typing import Optional

from ...config import AuthzSettings, get_settings
from ...core.events import FlowFinished, LifecycleEvent, TransitionRejected

logger = logging.getLogger(__name__)


class LoggingLifecycleObserver:
    """Turns lifecycle events into log records.

    Transitions and spawns are logged at ``lifecycle_log_level``; rejected
    events and failed flows are logged at WARNING. Each record carries the
    event's dictionary form under the ``lifecycle`` extra.
    """

    def __init__(self, settings: Optional[AuthzSettings] = None):
        self._settings = settings or get_settings()
        self._level = logging.getLevelName(self._settings.lifecycle_log_level)

    def _level_for(self, event: LifecycleEvent) -> Optional[int]:
        if isinstance(event, TransitionRejected):
            return logging.WARNING if self._settings.log_rejected_transitions else None
        if isinstance(event, FlowFinished) and not event.succeeded and not event.discarded:
            return logging.WARNING
        return self._level

    def notify(self, event: LifecycleEvent) -> None:
        level = self._level_for(event)
        if level is None or not logger.isEnabledFor(level):
            return

        if isinstance(event, FlowFinished) and event.error:
            logger.log(level, "%s: %s", event, event.error.get("message"),
                       extra={"lifecycle": event.to_dict()})
        else:
            logger.log(level, "%s", event, extra={"lifecycle": event.to_dict()})
