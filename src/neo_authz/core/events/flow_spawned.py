"""Sub-flow spawn lifecycle event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class FlowSpawned:
    """Event fired when a parent machine spawns a sub-flow."""

    parent_id: str
    kind: str
    flow_id: str
    event_timestamp: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.event_timestamp is None:
            object.__setattr__(self, "event_timestamp", datetime.now(timezone.utc))

    @property
    def event_type(self) -> str:
        """Get event type identifier."""
        return "flow_spawned"

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.event_type,
            "parent_id": self.parent_id,
            "kind": self.kind,
            "flow_id": self.flow_id,
            "event_timestamp": self.event_timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"FlowSpawned({self.kind}, flow_id={self.flow_id})"
