"""State machine protocol violation exception."""

from .base import AuthzError


class InvalidTransition(AuthzError):
    """Raised when an event is not accepted in the machine's current state."""

    def __init__(self, machine: str, state: str, event_type: str) -> None:
        self.machine = machine
        self.state = state
        self.event_type = event_type
        super().__init__(
            f"{machine} does not accept '{event_type}' in state '{state}'",
            details={"machine": machine, "state": state, "event_type": event_type},
        )
