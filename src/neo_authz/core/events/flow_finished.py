"""Sub-flow completion lifecycle event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class FlowFinished:
    """Event fired when a parent machine receives a sub-flow's result.

    ``discarded`` is set when the parent had already stopped listening to
    the flow (for example after an externally raised error).
    """

    parent_id: str
    kind: str
    flow_id: str
    succeeded: bool
    error: Optional[Dict[str, Any]] = None
    discarded: bool = False
    event_timestamp: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.event_timestamp is None:
            object.__setattr__(self, "event_timestamp", datetime.now(timezone.utc))

    @property
    def event_type(self) -> str:
        """Get event type identifier."""
        return "flow_finished"

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.event_type,
            "parent_id": self.parent_id,
            "kind": self.kind,
            "flow_id": self.flow_id,
            "succeeded": self.succeeded,
            "error": self.error,
            "discarded": self.discarded,
            "event_timestamp": self.event_timestamp.isoformat(),
        }

    def __str__(self) -> str:
        outcome = "succeeded" if self.succeeded else "failed"
        return f"FlowFinished({self.kind}, flow_id={self.flow_id}, {outcome})"
