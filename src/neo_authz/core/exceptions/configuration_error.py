"""Provider configuration failure exception."""

from typing import Any, Dict, List, Optional

from .base import AuthzError


class ConfigurationError(AuthzError):
    """Raised when provider configuration is missing or invalid."""

    def __init__(
        self,
        message: str = "Provider configuration is invalid",
        *,
        fields: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        self.fields = list(fields or [])
        super().__init__(
            message,
            details={"fields": self.fields, **(context or {})},
        )

    @classmethod
    def not_configured(cls, operation: str) -> "ConfigurationError":
        """Create exception for an operation attempted before configuration."""
        return cls(
            f"Cannot {operation}: provider is not configured",
            context={"operation": operation},
        )
