"""Lifecycle event observers."""

from .logging_observer import LoggingLifecycleObserver

__all__ = ["LoggingLifecycleObserver"]
