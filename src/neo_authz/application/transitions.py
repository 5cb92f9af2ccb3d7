"""Authorization orchestrator transition table.

``reduce_authorization`` is a pure function: given the current context and
an event it returns the next context plus the effects the orchestrator must
carry out. It performs no I/O and never mutates its input.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Type, Union

from ..core.entities import SessionInfo
from ..core.exceptions import AuthzError, InvalidTransition
from ..core.value_objects import CredentialSet, ProviderConfig, UserPoolTokens
from .events import (
    AuthorizationEvent,
    CachedCredentialAvailable,
    CancelSignIn,
    Configure,
    FetchUnAuthSession,
    FlowCompleted,
    RefreshSession,
    SignInCompleted,
    SignInRequested,
    SignOutRequested,
    ThrowError,
)
from .results import FlowKind

MACHINE_NAME = "authorization"


class AuthorizationState(str, Enum):
    NOT_CONFIGURED = "not_configured"
    CONFIGURED = "configured"
    SIGNING_IN = "signing_in"
    FETCHING_AUTHENTICATED_SESSION = "fetching_authenticated_session"
    FETCHING_UNAUTHENTICATED_SESSION = "fetching_unauthenticated_session"
    REFRESHING_SESSION = "refreshing_session"
    SESSION_ESTABLISHED = "session_established"
    ERROR = "error"


TERMINAL_STATES = frozenset({AuthorizationState.ERROR})


@dataclass(frozen=True)
class AuthorizationContext:
    """Everything the orchestrator knows, replaced on every transition."""

    state: AuthorizationState = AuthorizationState.NOT_CONFIGURED
    config: Optional[ProviderConfig] = None
    session_info: Optional[SessionInfo] = None
    error: Optional[AuthzError] = None


@dataclass(frozen=True)
class ConfigureService:
    """Build the credential service handle from the configuration."""

    config: ProviderConfig


@dataclass(frozen=True)
class SpawnFlow:
    """Start a fetch or refresh flow seeded with these values."""

    kind: FlowKind
    authenticated: bool
    identity_id: Optional[str] = None
    credentials: Optional[CredentialSet] = None
    user_pool_tokens: Optional[UserPoolTokens] = None
    force_refresh: bool = False


@dataclass(frozen=True)
class DetachFlows:
    """Stop listening to every in-flight session flow."""


Effect = Union[ConfigureService, SpawnFlow, DetachFlows]


@dataclass(frozen=True)
class Transition:
    context: AuthorizationContext
    effects: Tuple[Effect, ...] = ()


Handler = Callable[[AuthorizationContext, AuthorizationEvent], Transition]


def _configure(context: AuthorizationContext, event: Configure) -> Transition:
    return Transition(
        replace(context, state=AuthorizationState.CONFIGURED, config=event.config),
        (ConfigureService(event.config),),
    )


def _adopt_cached_session(
    context: AuthorizationContext,
    event: CachedCredentialAvailable
) -> Transition:
    effects = (ConfigureService(event.config),) if event.config is not None else ()
    return Transition(
        replace(
            context,
            state=AuthorizationState.SESSION_ESTABLISHED,
            config=event.config or context.config,
            session_info=event.session_info,
        ),
        effects,
    )


def _begin_sign_in(context: AuthorizationContext, event: SignInRequested) -> Transition:
    return Transition(replace(context, state=AuthorizationState.SIGNING_IN))


def _fetch_unauthenticated(context: AuthorizationContext, event: AuthorizationEvent) -> Transition:
    identity_id = context.session_info.identity_id if context.session_info else None
    return Transition(
        replace(context, state=AuthorizationState.FETCHING_UNAUTHENTICATED_SESSION),
        (SpawnFlow(FlowKind.FETCH, authenticated=False, identity_id=identity_id),),
    )


def _fetch_authenticated(context: AuthorizationContext, event: SignInCompleted) -> Transition:
    return Transition(
        replace(context, state=AuthorizationState.FETCHING_AUTHENTICATED_SESSION),
        (SpawnFlow(FlowKind.FETCH, authenticated=True, user_pool_tokens=event.user_pool_tokens),),
    )


def _refresh(context: AuthorizationContext, event: RefreshSession) -> Transition:
    session = context.session_info
    return Transition(
        replace(context, state=AuthorizationState.REFRESHING_SESSION),
        (
            SpawnFlow(
                FlowKind.REFRESH,
                authenticated=session.authenticated,
                identity_id=session.identity_id,
                credentials=session.credentials,
                user_pool_tokens=event.user_pool_tokens,
                force_refresh=event.force_refresh,
            ),
        ),
    )


def _sign_out(context: AuthorizationContext, event: SignOutRequested) -> Transition:
    # A cached session may have been adopted before any configuration arrived
    state = (
        AuthorizationState.CONFIGURED if context.config is not None
        else AuthorizationState.NOT_CONFIGURED
    )
    return Transition(replace(context, state=state, session_info=None))


def _fail(context: AuthorizationContext, error: AuthzError, effects: Tuple[Effect, ...] = ()) -> Transition:
    return Transition(
        replace(context, state=AuthorizationState.ERROR, session_info=None, error=error),
        effects,
    )


def _throw_error(context: AuthorizationContext, event: ThrowError) -> Transition:
    return _fail(context, event.error, (DetachFlows(),))


def _session_completed(kind: FlowKind, authenticated: Optional[bool]) -> Handler:
    """Build the handler for a fetch or refresh completion.

    ``authenticated`` of None keeps the current session's flag.
    """

    def handler(context: AuthorizationContext, event: FlowCompleted) -> Transition:
        if event.kind is not kind:
            raise InvalidTransition(MACHINE_NAME, context.state.value, event.event_type)

        if not event.result.ok:
            return _fail(context, event.result.error)

        fetched = event.result.value
        flag = authenticated
        if flag is None:
            flag = context.session_info.authenticated if context.session_info else False

        return Transition(
            replace(
                context,
                state=AuthorizationState.SESSION_ESTABLISHED,
                session_info=SessionInfo(
                    identity_id=fetched.identity_id,
                    credentials=fetched.credentials,
                    authenticated=flag,
                ),
                error=None,
            )
        )

    return handler


_TRANSITIONS: Dict[Tuple[AuthorizationState, Type], Handler] = {
    (AuthorizationState.NOT_CONFIGURED, Configure): _configure,
    (AuthorizationState.NOT_CONFIGURED, CachedCredentialAvailable): _adopt_cached_session,
    (AuthorizationState.CONFIGURED, SignInRequested): _begin_sign_in,
    (AuthorizationState.CONFIGURED, FetchUnAuthSession): _fetch_unauthenticated,
    (AuthorizationState.SIGNING_IN, SignInCompleted): _fetch_authenticated,
    (AuthorizationState.SIGNING_IN, CancelSignIn): _fetch_unauthenticated,
    (AuthorizationState.FETCHING_AUTHENTICATED_SESSION, FlowCompleted):
        _session_completed(FlowKind.FETCH, True),
    (AuthorizationState.FETCHING_UNAUTHENTICATED_SESSION, FlowCompleted):
        _session_completed(FlowKind.FETCH, False),
    (AuthorizationState.SESSION_ESTABLISHED, RefreshSession): _refresh,
    (AuthorizationState.SESSION_ESTABLISHED, SignOutRequested): _sign_out,
    (AuthorizationState.SESSION_ESTABLISHED, SignInRequested): _begin_sign_in,
    (AuthorizationState.REFRESHING_SESSION, FlowCompleted):
        _session_completed(FlowKind.REFRESH, None),
}


def accepts(state: AuthorizationState, event_type: Type) -> bool:
    """Check whether ``state`` has a transition for events of ``event_type``."""
    if event_type is ThrowError:
        return state not in TERMINAL_STATES
    return (state, event_type) in _TRANSITIONS


def reduce_authorization(context: AuthorizationContext, event: AuthorizationEvent) -> Transition:
    """Compute the orchestrator's next context and effects.

    Raises:
        InvalidTransition: If the event is not valid in the current state
    """
    if isinstance(event, ThrowError) and context.state not in TERMINAL_STATES:
        return _throw_error(context, event)

    handler = _TRANSITIONS.get((context.state, type(event)))
    if handler is None:
        raise InvalidTransition(MACHINE_NAME, context.state.value, event.event_type)

    return handler(context, event)
