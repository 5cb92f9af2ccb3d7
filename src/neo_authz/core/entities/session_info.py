"""Session info domain entity."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..value_objects import CredentialSet


def mask_identifier(value: Optional[str]) -> Optional[str]:
    """Mask an identity identifier for logging."""
    if value is None:
        return None
    if len(value) <= 12:
        return "***"
    return f"{value[:6]}...{value[-4:]}"


@dataclass(frozen=True)
class SessionInfo:
    """The currently valid session.

    Exactly one instance is authoritative at a time and it is owned by the
    orchestrator. It is replaced wholesale on every successful fetch or
    refresh and cleared on sign-out; it is never patched field by field.
    """

    identity_id: Optional[str]
    credentials: Optional[CredentialSet]
    authenticated: bool = False

    def is_expired(self, skew_seconds: int = 0) -> bool:
        """Check if the session's credentials need renewal."""
        if self.credentials is None:
            return False
        return self.credentials.is_expired(skew_seconds)

    @property
    def has_credentials(self) -> bool:
        return self.credentials is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert session to a log-safe dictionary."""
        return {
            "identity_id": mask_identifier(self.identity_id),
            "authenticated": self.authenticated,
            "access_key_id": (
                mask_identifier(self.credentials.access_key_id) if self.credentials else None
            ),
            "expiration": (
                self.credentials.expiration.isoformat()
                if self.credentials and self.credentials.expiration
                else None
            ),
        }
