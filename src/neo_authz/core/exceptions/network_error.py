"""Identity provider call failure exception."""

from typing import Any, Dict, Optional

from .base import AuthzError


class NetworkError(AuthzError):
    """Raised when an identity, credential or sign-up call fails.

    Covers both transport level failures and service level errors returned
    by the identity provider.
    """

    def __init__(
        self,
        message: str = "Identity provider call failed",
        *,
        operation: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        super().__init__(
            message,
            details={
                "operation": operation,
                "status_code": status_code,
                **(context or {}),
            },
        )

    @classmethod
    def from_exception(cls, operation: str, exc: BaseException) -> "NetworkError":
        """Wrap an unexpected exception raised by the service client."""
        return cls(
            f"{operation} failed: {exc}",
            operation=operation,
            context={"cause": exc.__class__.__name__},
        )

    def __str__(self) -> str:
        if self.operation:
            return f"{self.message} (operation={self.operation})"
        return self.message
