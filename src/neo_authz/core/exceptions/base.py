"""Base exceptions for neo-authz.

This module defines the root of the neo-authz exception hierarchy. Every
error carries an error code and a details mapping so that failures reported
by sub-flows can be logged and surfaced to callers in a structured way.
"""

from typing import Any, Dict, Optional


class AuthzError(Exception):
    """Base exception for all neo-authz errors.

    All failures propagated between flows and the orchestrator inherit from
    this class, so the completion channel only ever carries typed errors.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a dictionary for structured logging."""
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": self.__class__.__name__,
        }
