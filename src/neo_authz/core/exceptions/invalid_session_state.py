"""Session invariant violation exception."""

from typing import Any, Dict, Optional

from .base import AuthzError


class InvalidSessionState(AuthzError):
    """Raised when an operation would break a session invariant."""

    def __init__(
        self,
        message: str,
        *,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        self.reason = reason
        super().__init__(message, details={"reason": reason, **(context or {})})

    @classmethod
    def missing_identity(cls) -> "InvalidSessionState":
        """Create exception for a credential request without an identity id."""
        return cls(
            "Cannot exchange credentials without a resolved identity id",
            reason="missing_identity_id",
        )

    @classmethod
    def flow_in_flight(cls, kind: str) -> "InvalidSessionState":
        """Create exception for a second concurrent session flow."""
        return cls(
            f"A session flow is already in flight, refusing to spawn '{kind}'",
            reason="flow_in_flight",
            context={"kind": kind},
        )
