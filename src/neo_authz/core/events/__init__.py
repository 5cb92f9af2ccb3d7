"""Authorization lifecycle events.

Structured events published by the orchestrator and its sub-flows.
Observers subscribe to these instead of the machines logging directly.
"""

from typing import Union

from .state_transitioned import StateTransitioned
from .transition_rejected import TransitionRejected
from .flow_spawned import FlowSpawned
from .flow_finished import FlowFinished

LifecycleEvent = Union[StateTransitioned, TransitionRejected, FlowSpawned, FlowFinished]

__all__ = [
    "LifecycleEvent",
    "StateTransitioned",
    "TransitionRejected",
    "FlowSpawned",
    "FlowFinished",
]
