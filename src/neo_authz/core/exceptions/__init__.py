"""Authorization domain exceptions.

Each exception handles exactly one failure scenario. Sub-flows report these
through their completion channel; they are never retried automatically.
"""

from .base import AuthzError
from .configuration_error import ConfigurationError
from .network_error import NetworkError
from .validation_error import ValidationError
from .invalid_transition import InvalidTransition
from .invalid_session_state import InvalidSessionState

__all__ = [
    "AuthzError",
    "ConfigurationError",
    "NetworkError",
    "ValidationError",
    "InvalidTransition",
    "InvalidSessionState",
]
