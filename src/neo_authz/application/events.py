"""Events accepted by the authorization orchestrator and the sign-up flow.

Each event is a frozen dataclass with a fixed ``event_type`` used as the
trigger name in lifecycle events and rejection errors.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional, Union

from ..core.entities import SessionInfo
from ..core.exceptions import AuthzError
from ..core.value_objects import ProviderConfig, UserPoolTokens
from .results import FlowKind, FlowResult


def _as_tokens(value: Any) -> Any:
    if isinstance(value, Mapping):
        return UserPoolTokens.from_dict(value)
    return value


@dataclass(frozen=True)
class Configure:
    """Hand the provider configuration to the orchestrator, once."""

    config: ProviderConfig
    event_type: ClassVar[str] = "configure"

    def __post_init__(self) -> None:
        if isinstance(self.config, Mapping):
            object.__setattr__(self, "config", ProviderConfig.from_mapping(self.config))


@dataclass(frozen=True)
class CachedCredentialAvailable:
    """A persisted session was found and can be adopted without a fetch."""

    session_info: SessionInfo
    config: Optional[ProviderConfig] = None
    event_type: ClassVar[str] = "cached_credential_available"

    def __post_init__(self) -> None:
        if not isinstance(self.session_info, SessionInfo):
            raise TypeError("Cached session info must be a SessionInfo")

        if isinstance(self.config, Mapping):
            object.__setattr__(self, "config", ProviderConfig.from_mapping(self.config))


@dataclass(frozen=True)
class SignInRequested:
    event_type: ClassVar[str] = "sign_in_requested"


@dataclass(frozen=True)
class SignInCompleted:
    """User pool sign-in finished; tokens authorize the authenticated fetch."""

    user_pool_tokens: UserPoolTokens
    event_type: ClassVar[str] = "sign_in_completed"

    def __post_init__(self) -> None:
        object.__setattr__(self, "user_pool_tokens", _as_tokens(self.user_pool_tokens))


@dataclass(frozen=True)
class CancelSignIn:
    event_type: ClassVar[str] = "cancel_sign_in"


@dataclass(frozen=True)
class FetchUnAuthSession:
    event_type: ClassVar[str] = "fetch_unauth_session"


@dataclass(frozen=True)
class RefreshSession:
    """Renew the established session's credentials."""

    user_pool_tokens: Optional[UserPoolTokens] = None
    force_refresh: bool = False
    event_type: ClassVar[str] = "refresh_session"

    def __post_init__(self) -> None:
        object.__setattr__(self, "user_pool_tokens", _as_tokens(self.user_pool_tokens))


@dataclass(frozen=True)
class SignOutRequested:
    event_type: ClassVar[str] = "sign_out_requested"


@dataclass(frozen=True)
class ThrowError:
    """Externally raised error; moves the orchestrator to its error state."""

    error: AuthzError
    event_type: ClassVar[str] = "throw_error"

    def __post_init__(self) -> None:
        if not isinstance(self.error, AuthzError):
            wrapped = AuthzError(str(self.error), error_code="ExternalError")
            wrapped.__cause__ = self.error
            object.__setattr__(self, "error", wrapped)


@dataclass(frozen=True)
class FlowCompleted:
    """Terminal report posted by a sub-flow to its invoker's mailbox."""

    kind: FlowKind
    flow_id: str
    result: FlowResult
    event_type: ClassVar[str] = "flow_completed"


@dataclass(frozen=True)
class ConfirmSignUp:
    """Confirmation code for a sign-up awaiting confirmation."""

    confirmation_code: str
    event_type: ClassVar[str] = "confirm_sign_up"

    def __post_init__(self) -> None:
        if not self.confirmation_code or not self.confirmation_code.strip():
            raise ValueError("Confirmation code cannot be empty")


AuthorizationEvent = Union[
    Configure,
    CachedCredentialAvailable,
    SignInRequested,
    SignInCompleted,
    CancelSignIn,
    FetchUnAuthSession,
    RefreshSession,
    SignOutRequested,
    ThrowError,
    FlowCompleted,
]
