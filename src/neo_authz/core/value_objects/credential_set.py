"""Temporary access credential value object."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class CredentialSet:
    """Short-lived access credentials scoped to an identity identifier.

    Handles ONLY credential representation and expiry checks.
    Secrets are excluded from ``repr`` so credential sets are safe to log.
    """

    access_key_id: str
    secret_access_key: Optional[str] = field(default=None, repr=False)
    session_token: Optional[str] = field(default=None, repr=False)
    expiration: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate credentials and normalise the expiration timezone."""
        if not isinstance(self.access_key_id, str):
            raise TypeError("Access key id must be a string")

        if not self.access_key_id:
            raise ValueError("Access key id cannot be empty")

        if self.expiration is not None and self.expiration.tzinfo is None:
            object.__setattr__(
                self, "expiration", self.expiration.replace(tzinfo=timezone.utc)
            )

    def is_expired(self, skew_seconds: int = 0, now: Optional[datetime] = None) -> bool:
        """Check if credentials are expired or expire within ``skew_seconds``.

        Credentials without an expiration never expire.
        """
        if self.expiration is None:
            return False

        now = now or datetime.now(timezone.utc)
        return now + timedelta(seconds=skew_seconds) >= self.expiration

    @property
    def seconds_until_expiry(self) -> Optional[int]:
        """Get seconds until credentials expire."""
        if self.expiration is None:
            return None

        delta = self.expiration - datetime.now(timezone.utc)
        return max(0, int(delta.total_seconds()))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CredentialSet":
        """Build credentials from a provider response or a snake_case mapping.

        Accepts the provider's ``AccessKeyId``/``SecretKey``/``SessionToken``/
        ``Expiration`` keys as well as the attribute names.
        """
        expiration = data.get("expiration", data.get("Expiration"))
        if isinstance(expiration, (int, float)):
            expiration = datetime.fromtimestamp(expiration, tz=timezone.utc)
        elif isinstance(expiration, str):
            expiration = datetime.fromisoformat(expiration)

        return cls(
            access_key_id=data.get("access_key_id", data.get("AccessKeyId")),
            secret_access_key=data.get("secret_access_key", data.get("SecretKey")),
            session_token=data.get("session_token", data.get("SessionToken")),
            expiration=expiration,
        )
