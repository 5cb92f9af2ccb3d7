"""Infrastructure adapters for neo-authz.

Contains concrete implementations of the core protocols that ship with the
library. Identity provider clients and credential stores are supplied by
the embedding application.
"""

from .observers import LoggingLifecycleObserver

__all__ = ["LoggingLifecycleObserver"]
