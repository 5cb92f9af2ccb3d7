"""Authorization orchestrator.

Owns the provider configuration, the credential service handle and the one
authoritative ``SessionInfo``. Events are queued in the orchestrator's
mailbox and processed one at a time by a worker task; each event goes
through ``reduce_authorization`` and the resulting effects (building the
service, spawning or detaching sub-flows) are carried out here.

Example:
    async with AuthorizationOrchestrator(service_factory) as authz:
        authz.send(Configure(config))
        authz.send(FetchUnAuthSession())
        await authz.wait_for(AuthorizationState.SESSION_ESTABLISHED)
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Set

from ..config import AuthzSettings, get_settings
from ..core.entities import SessionInfo
from ..core.events import FlowFinished, FlowSpawned
from ..core.exceptions import (
    AuthzError,
    ConfigurationError,
    InvalidSessionState,
    InvalidTransition,
)
from ..core.protocols import (
    CredentialServiceClient,
    CredentialServiceFactory,
    CredentialStore,
    LifecycleObserver,
)
from ..core.value_objects import ProviderConfig
from ..infrastructure.observers import LoggingLifecycleObserver
from .event_bus import LifecycleEventBus
from .events import (
    AuthorizationEvent,
    CachedCredentialAvailable,
    FlowCompleted,
    ThrowError,
)
from .flows import (
    FetchSessionContext,
    FetchSessionFlow,
    Flow,
    RefreshSessionContext,
    RefreshSessionFlow,
    SignUpContext,
    SignUpFlow,
)
from .machine import Machine
from .mailbox import Mailbox
from .results import SESSION_FLOW_KINDS, FlowKind
from .transitions import (
    MACHINE_NAME,
    TERMINAL_STATES,
    AuthorizationContext,
    AuthorizationState,
    ConfigureService,
    DetachFlows,
    Effect,
    SpawnFlow,
    Transition,
    reduce_authorization,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChildFlow:
    """Supervisor table entry for an in-flight sub-flow."""

    kind: FlowKind
    flow: Flow
    task: "asyncio.Task"


@dataclass(frozen=True)
class AuthorizationSnapshot:
    """Read-only view of the orchestrator for callers."""

    state: AuthorizationState
    session_info: Optional[SessionInfo]
    error: Optional[AuthzError]
    active_flows: FrozenSet[FlowKind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "session": self.session_info.to_dict() if self.session_info else None,
            "error": self.error.to_dict() if self.error else None,
            "active_flows": sorted(kind.value for kind in self.active_flows),
        }


class AuthorizationOrchestrator(Machine[AuthorizationState]):
    """Top-level authorization state machine and sub-flow supervisor."""

    machine_name = MACHINE_NAME

    def __init__(
        self,
        service_factory: CredentialServiceFactory,
        *,
        observers: Optional[Iterable[LifecycleObserver]] = None,
        settings: Optional[AuthzSettings] = None,
        orchestrator_id: Optional[str] = None
    ):
        self._settings = settings or get_settings()
        if observers is None:
            observers = (LoggingLifecycleObserver(self._settings),)

        super().__init__(
            AuthorizationState.NOT_CONFIGURED,
            machine_id=orchestrator_id,
            event_bus=LifecycleEventBus(observers),
        )
        self._service_factory = service_factory
        self._service: Optional[CredentialServiceClient] = None
        self._context = AuthorizationContext()
        self._mailbox: Mailbox = Mailbox()
        self._children: Dict[FlowKind, ChildFlow] = {}
        self._detached: Set[asyncio.Task] = set()
        self._worker: Optional[asyncio.Task] = None

    # Observable results

    @property
    def context(self) -> AuthorizationContext:
        return self._context

    @property
    def session_info(self) -> Optional[SessionInfo]:
        return self._context.session_info

    @property
    def error(self) -> Optional[AuthzError]:
        return self._context.error

    @property
    def config(self) -> Optional[ProviderConfig]:
        return self._context.config

    @property
    def active_flows(self) -> FrozenSet[FlowKind]:
        return frozenset(self._children)

    @property
    def snapshot(self) -> AuthorizationSnapshot:
        return AuthorizationSnapshot(
            state=self._context.state,
            session_info=self._context.session_info,
            error=self._context.error,
            active_flows=self.active_flows,
        )

    # Lifecycle

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self) -> None:
        """Start the mailbox worker if it is not running."""
        if not self.running:
            self._worker = asyncio.create_task(
                self._process_mailbox(), name=f"neo-authz-{self.machine_id}"
            )

    async def aclose(self) -> None:
        """Stop the worker and cancel every child task."""
        tasks = [child.task for child in self._children.values()]
        tasks.extend(self._detached)
        if self._worker is not None:
            tasks.append(self._worker)

        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        self._children.clear()
        self._detached.clear()
        self._worker = None
        logger.debug("Orchestrator %s closed", self.machine_id)

    async def __aenter__(self) -> "AuthorizationOrchestrator":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    # Inputs

    def send(self, event: AuthorizationEvent) -> None:
        """Queue an event for the orchestrator."""
        self._mailbox.post(event)
        self.start()

    async def restore_cached_session(
        self,
        store: CredentialStore,
        config: Optional[ProviderConfig] = None
    ) -> bool:
        """Adopt a persisted session if the store has one.

        Returns:
            True if a cached session was found and queued for adoption
        """
        session_info = await store.load()
        if session_info is None:
            logger.debug("No cached session available")
            return False

        self.send(CachedCredentialAvailable(session_info=session_info, config=config))
        return True

    def spawn_sign_up(
        self,
        username: str,
        password: str,
        *,
        attributes: Optional[Mapping[str, Any]] = None,
        validation_data: Optional[Mapping[str, Any]] = None,
        client_metadata: Optional[Mapping[str, str]] = None
    ) -> SignUpFlow:
        """Start an independent sign-up flow.

        The flow's outcome is published as a lifecycle event only; it never
        changes the orchestrator's state or session.

        Raises:
            ConfigurationError: If the provider has not been configured
            InvalidSessionState: If a sign-up is already in flight
        """
        if self._service is None or self._context.config is None:
            raise ConfigurationError.not_configured("sign up")

        flow = SignUpFlow(
            SignUpContext(
                service=self._service,
                auth_config=self._context.config,
                username=username,
                password=password,
                attributes=dict(attributes or {}),
                validation_data=dict(validation_data or {}),
                client_metadata=dict(client_metadata or {}),
            ),
            invoker=self._mailbox,
            event_bus=self._event_bus,
        )
        self._spawn(flow)
        self.start()
        return flow

    # Mailbox processing

    async def _process_mailbox(self) -> None:
        while True:
            event = await self._mailbox.receive()
            try:
                self._handle(event)
            except Exception as e:
                logger.exception(
                    "Unexpected failure handling %s in orchestrator %s",
                    getattr(event, "event_type", type(event).__name__), self.machine_id,
                )
                self._fail_unexpectedly(e)

    def _fail_unexpectedly(self, exc: Exception) -> None:
        if self._context.state in TERMINAL_STATES:
            return

        error = AuthzError(
            f"{self.machine_name} failed unexpectedly: {exc}",
            error_code="UnexpectedError",
            details={"cause": exc.__class__.__name__},
        )
        error.__cause__ = exc
        self._handle(ThrowError(error))

    def _handle(self, event: AuthorizationEvent) -> None:
        if isinstance(event, FlowCompleted) and not self._accept_flow_result(event):
            return

        try:
            transition = reduce_authorization(self._context, event)
        except InvalidTransition as e:
            logger.debug("Rejected %s: %s", event.event_type, e)
            self._reject(event.event_type, e.message)
            return

        self._commit(transition, event.event_type)

    def _commit(self, transition: Transition, trigger: str) -> None:
        self._context = transition.context
        try:
            for effect in transition.effects:
                self._apply(effect)
        except AuthzError as e:
            logger.error("Failed to apply %s effects: %s", trigger, e)
            self._context = reduce_authorization(self._context, ThrowError(e)).context
            self._detach_flows()

        self._transition(self._context.state, trigger)

    def _accept_flow_result(self, event: FlowCompleted) -> bool:
        """Remove a finished child from the table.

        Returns:
            True if the result should drive a transition
        """
        child = self._children.get(event.kind)
        error = event.result.error.to_dict() if event.result.error else None

        if child is None or child.flow.flow_id != event.flow_id:
            logger.debug("Discarding result of detached %s flow %s", event.kind.value, event.flow_id)
            self._event_bus.publish(
                FlowFinished(
                    parent_id=self.machine_id,
                    kind=event.kind.value,
                    flow_id=event.flow_id,
                    succeeded=event.result.ok,
                    error=error,
                    discarded=True,
                )
            )
            return False

        del self._children[event.kind]
        self._event_bus.publish(
            FlowFinished(
                parent_id=self.machine_id,
                kind=event.kind.value,
                flow_id=event.flow_id,
                succeeded=event.result.ok,
                error=error,
            )
        )
        return event.kind in SESSION_FLOW_KINDS

    # Effects

    def _apply(self, effect: Effect) -> None:
        if isinstance(effect, ConfigureService):
            self._configure_service(effect.config)
        elif isinstance(effect, SpawnFlow):
            self._spawn(self._build_session_flow(effect))
        elif isinstance(effect, DetachFlows):
            self._detach_flows()

    def _configure_service(self, config: ProviderConfig) -> None:
        try:
            self._service = self._service_factory(config)
        except AuthzError:
            raise
        except Exception as e:
            raise ConfigurationError(
                f"Failed to build credential service: {e}",
                context={"cause": e.__class__.__name__},
            ) from e
        logger.debug("Credential service configured for region %s", config.region)

    def _build_session_flow(self, effect: SpawnFlow) -> Flow:
        if effect.kind is FlowKind.FETCH:
            return FetchSessionFlow(
                FetchSessionContext(
                    client_config=self._context.config,
                    service=self._service,
                    authenticated=effect.authenticated,
                    identity_id=effect.identity_id,
                    user_pool_tokens=effect.user_pool_tokens,
                ),
                invoker=self._mailbox,
                event_bus=self._event_bus,
            )

        return RefreshSessionFlow(
            RefreshSessionContext(
                client_config=self._context.config,
                service=self._service,
                identity_id=effect.identity_id,
                credentials=effect.credentials,
                authenticated=effect.authenticated,
                user_pool_tokens=effect.user_pool_tokens,
                force_refresh=effect.force_refresh,
                expiry_skew_seconds=self._settings.credential_expiry_skew_seconds,
            ),
            invoker=self._mailbox,
            event_bus=self._event_bus,
        )

    def _spawn(self, flow: Flow) -> None:
        kind = flow.kind
        busy = kind in self._children
        if kind in SESSION_FLOW_KINDS:
            busy = busy or bool(SESSION_FLOW_KINDS.intersection(self._children))
        if busy:
            raise InvalidSessionState.flow_in_flight(kind.value)

        task = asyncio.create_task(flow.run(), name=f"neo-authz-{kind.value}-{flow.flow_id}")
        self._children[kind] = ChildFlow(kind=kind, flow=flow, task=task)
        self._event_bus.publish(
            FlowSpawned(parent_id=self.machine_id, kind=kind.value, flow_id=flow.flow_id)
        )

    def _detach_flows(self) -> None:
        for kind in SESSION_FLOW_KINDS.intersection(self._children):
            child = self._children.pop(kind)
            logger.debug("Detached %s flow %s", kind.value, child.flow.flow_id)
            if not child.task.done():
                self._detached.add(child.task)
                child.task.add_done_callback(self._detached.discard)
