"""Rejected event lifecycle event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TransitionRejected:
    """Event fired when a machine refuses an event in its current state."""

    machine: str
    machine_id: str
    state: str
    trigger: str
    reason: str
    event_timestamp: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.event_timestamp is None:
            object.__setattr__(self, "event_timestamp", datetime.now(timezone.utc))

    @property
    def event_type(self) -> str:
        """Get event type identifier."""
        return "transition_rejected"

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.event_type,
            "machine": self.machine,
            "machine_id": self.machine_id,
            "state": self.state,
            "trigger": self.trigger,
            "reason": self.reason,
            "event_timestamp": self.event_timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.machine}[{self.machine_id}]: rejected {self.trigger} in {self.state}"
