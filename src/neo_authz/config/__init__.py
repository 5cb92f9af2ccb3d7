"""Configuration for neo-authz."""

from .settings import AuthzSettings, get_settings, reset_settings
from .logging_config import LoggingConfig, LogLevel, LogVerbosity, setup_logging

__all__ = [
    "AuthzSettings",
    "get_settings",
    "reset_settings",
    "LoggingConfig",
    "LogLevel",
    "LogVerbosity",
    "setup_logging",
]
