"""Registration response value object."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a sign-up registration call.

    ``user_confirmed`` set to False is the signal that a confirmation code
    challenge must be answered before the registration is complete.
    """

    user_confirmed: bool
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def user_sub(self) -> Any:
        """Get the provider's subject identifier for the new user, if any."""
        return self.raw.get("UserSub")

    @property
    def code_delivery_details(self) -> Any:
        """Get where the confirmation code was delivered, if any."""
        return self.raw.get("CodeDeliveryDetails")

    @classmethod
    def from_response(cls, response: Mapping[str, Any]) -> "RegistrationResult":
        """Build result from a raw provider response."""
        return cls(
            user_confirmed=response.get("UserConfirmed") is not False,
            raw=dict(response),
        )
