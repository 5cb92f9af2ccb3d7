"""User pool token value object."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class UserPoolTokens:
    """Tokens issued by the user pool after a successful sign-in.

    Transient: handed to the session fetch or refresh flow and never
    retained by the orchestrator. Token values are excluded from ``repr``.
    """

    id_token: str = field(repr=False)
    access_token: Optional[str] = field(default=None, repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate that an id token is present."""
        if not isinstance(self.id_token, str):
            raise TypeError("Id token must be a string")

        if not self.id_token.strip():
            raise ValueError("Id token cannot be empty")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserPoolTokens":
        """Build tokens from snake_case, camelCase or provider keys."""
        return cls(
            id_token=data.get("id_token") or data.get("idToken") or data.get("IdToken"),
            access_token=(
                data.get("access_token") or data.get("accessToken") or data.get("AccessToken")
            ),
            refresh_token=(
                data.get("refresh_token") or data.get("refreshToken") or data.get("RefreshToken")
            ),
        )
