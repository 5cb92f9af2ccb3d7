"""
neo-authz: client-side session and authorization orchestration.

An authorization orchestrator that configures an identity provider client,
fetches guest or signed-in sessions, refreshes credentials, signs out and
runs sign-up flows, each as a small asyncio state machine.
"""

from .__version__ import __version__
from .application import (
    AuthorizationOrchestrator,
    AuthorizationSnapshot,
    AuthorizationState,
    CachedCredentialAvailable,
    CancelSignIn,
    Configure,
    ConfirmSignUp,
    FetchSessionFlow,
    FetchUnAuthSession,
    FlowKind,
    FlowResult,
    RefreshSession,
    RefreshSessionFlow,
    SignInCompleted,
    SignInRequested,
    SignOutRequested,
    SignUpFlow,
    SignUpState,
    ThrowError,
)
from .config import AuthzSettings, get_settings, setup_logging
from .core import (
    AuthzError,
    ConfigurationError,
    CredentialServiceClient,
    CredentialSet,
    CredentialStore,
    InvalidSessionState,
    InvalidTransition,
    LifecycleObserver,
    NetworkError,
    ProviderConfig,
    RegistrationResult,
    SessionInfo,
    UserPoolTokens,
    ValidationError,
)

__all__ = [
    "__version__",
    "AuthorizationOrchestrator",
    "AuthorizationSnapshot",
    "AuthorizationState",
    "Configure",
    "CachedCredentialAvailable",
    "SignInRequested",
    "SignInCompleted",
    "CancelSignIn",
    "FetchUnAuthSession",
    "RefreshSession",
    "SignOutRequested",
    "ThrowError",
    "ConfirmSignUp",
    "FetchSessionFlow",
    "RefreshSessionFlow",
    "SignUpFlow",
    "SignUpState",
    "FlowKind",
    "FlowResult",
    "AuthzSettings",
    "get_settings",
    "setup_logging",
    "AuthzError",
    "ConfigurationError",
    "NetworkError",
    "ValidationError",
    "InvalidTransition",
    "InvalidSessionState",
    "ProviderConfig",
    "CredentialSet",
    "UserPoolTokens",
    "RegistrationResult",
    "SessionInfo",
    "CredentialServiceClient",
    "CredentialStore",
    "LifecycleObserver",
]
