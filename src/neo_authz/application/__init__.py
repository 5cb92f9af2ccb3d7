"""Authorization application layer.

Components:
- orchestrator: The top-level authorization machine and flow supervisor
- transitions: Pure transition table of the orchestrator
- flows: Fetch, refresh and sign-up sub-flows
- events: Events accepted by the orchestrator and the sign-up flow
"""

from .event_bus import LifecycleEventBus
from .events import (
    AuthorizationEvent,
    CachedCredentialAvailable,
    CancelSignIn,
    Configure,
    ConfirmSignUp,
    FetchUnAuthSession,
    FlowCompleted,
    RefreshSession,
    SignInCompleted,
    SignInRequested,
    SignOutRequested,
    ThrowError,
)
from .flows import (
    FetchSessionContext,
    FetchSessionFlow,
    FetchSessionState,
    Flow,
    RefreshSessionContext,
    RefreshSessionFlow,
    RefreshSessionState,
    SignUpContext,
    SignUpFlow,
    SignUpOutcome,
    SignUpState,
)
from .mailbox import Mailbox
from .machine import Machine
from .orchestrator import AuthorizationOrchestrator, AuthorizationSnapshot, ChildFlow
from .results import FetchedSession, FlowKind, FlowResult
from .transitions import (
    AuthorizationContext,
    AuthorizationState,
    ConfigureService,
    DetachFlows,
    SpawnFlow,
    Transition,
    reduce_authorization,
)

__all__ = [
    # Orchestrator
    "AuthorizationOrchestrator",
    "AuthorizationSnapshot",
    "ChildFlow",
    "AuthorizationState",
    "AuthorizationContext",
    "Transition",
    "ConfigureService",
    "SpawnFlow",
    "DetachFlows",
    "reduce_authorization",

    # Events
    "AuthorizationEvent",
    "Configure",
    "CachedCredentialAvailable",
    "SignInRequested",
    "SignInCompleted",
    "CancelSignIn",
    "FetchUnAuthSession",
    "RefreshSession",
    "SignOutRequested",
    "ThrowError",
    "FlowCompleted",
    "ConfirmSignUp",

    # Flows
    "Flow",
    "FlowKind",
    "FlowResult",
    "FetchedSession",
    "FetchSessionContext",
    "FetchSessionFlow",
    "FetchSessionState",
    "RefreshSessionContext",
    "RefreshSessionFlow",
    "RefreshSessionState",
    "SignUpContext",
    "SignUpFlow",
    "SignUpOutcome",
    "SignUpState",

    # Plumbing
    "LifecycleEventBus",
    "Machine",
    "Mailbox",
]
