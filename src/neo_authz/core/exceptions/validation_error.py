"""Provider rejection exception."""

from typing import Any, Dict, Optional

from .base import AuthzError


class ValidationError(AuthzError):
    """Raised when the provider rejects a registration or confirmation.

    Also used for malformed requests detected before any call is made,
    e.g. an authenticated fetch without an id token.
    """

    def __init__(
        self,
        message: str = "Request rejected by identity provider",
        *,
        field: Optional[str] = None,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        self.field = field
        self.reason = reason
        super().__init__(
            message,
            details={"field": field, "reason": reason, **(context or {})},
        )

    @classmethod
    def missing_id_token(cls, operation: str) -> "ValidationError":
        """Create exception for an authenticated call without an id token."""
        return cls(
            f"{operation} requires an id token",
            field="id_token",
            reason="missing_id_token",
        )
