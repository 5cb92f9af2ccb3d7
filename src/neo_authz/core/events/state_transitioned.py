"""State transition lifecycle event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class StateTransitioned:
    """Event fired when a machine moves from one state to another.

    Represents ONLY the transition occurrence. Published by every machine so
    that logging and metrics live outside the transition logic.
    """

    machine: str
    machine_id: str
    source: str
    target: str
    trigger: str
    event_timestamp: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.event_timestamp is None:
            object.__setattr__(self, "event_timestamp", datetime.now(timezone.utc))

    @property
    def event_type(self) -> str:
        """Get event type identifier."""
        return "state_transitioned"

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.event_type,
            "machine": self.machine,
            "machine_id": self.machine_id,
            "source": self.source,
            "target": self.target,
            "trigger": self.trigger,
            "event_timestamp": self.event_timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.machine}[{self.machine_id}]: {self.source} -> {self.target} on {self.trigger}"
