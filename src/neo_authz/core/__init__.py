"""Core authorization domain objects.

Contains only domain objects and contracts, no orchestration logic.

Components:
- value_objects: Immutable configuration, credential and token values
- exceptions: Typed failures propagated between machines
- protocols: Contracts for the credential service, storage and observers
- entities: The session info owned by the orchestrator
- events: Structured lifecycle events
"""

from .value_objects import ProviderConfig, CredentialSet, UserPoolTokens, RegistrationResult
from .exceptions import (
    AuthzError,
    ConfigurationError,
    NetworkError,
    ValidationError,
    InvalidTransition,
    InvalidSessionState,
)
from .protocols import (
    CredentialServiceClient,
    CredentialServiceFactory,
    CredentialStore,
    LifecycleObserver,
)
from .entities import SessionInfo
from .events import LifecycleEvent, StateTransitioned, TransitionRejected, FlowSpawned, FlowFinished

__all__ = [
    # Value Objects
    "ProviderConfig",
    "CredentialSet",
    "UserPoolTokens",
    "RegistrationResult",

    # Exceptions
    "AuthzError",
    "ConfigurationError",
    "NetworkError",
    "ValidationError",
    "InvalidTransition",
    "InvalidSessionState",

    # Protocols
    "CredentialServiceClient",
    "CredentialServiceFactory",
    "CredentialStore",
    "LifecycleObserver",

    # Entities
    "SessionInfo",

    # Events
    "LifecycleEvent",
    "StateTransitioned",
    "TransitionRejected",
    "FlowSpawned",
    "FlowFinished",
]
