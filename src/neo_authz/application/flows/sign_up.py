"""Sign-up sub-flow.

Registers a user and, when the provider asks for it, waits for the
confirmation code before confirming the registration. The flow never reads
or writes the orchestrator's session.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ...core.exceptions import AuthzError, ConfigurationError
from ...core.protocols import CredentialServiceClient
from ...core.value_objects import ProviderConfig, RegistrationResult
from ..event_bus import LifecycleEventBus
from ..events import ConfirmSignUp
from ..mailbox import Mailbox
from ..results import FlowKind
from .base import Flow

logger = logging.getLogger(__name__)


class SignUpState(str, Enum):
    NOT_STARTED = "not_started"
    SUBMITTING = "submitting"
    CONFIRMATION_PENDING = "confirmation_pending"
    CONFIRMING = "confirming"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class SignUpContext:
    """Registration request plus what the flow learned along the way."""

    service: Optional[CredentialServiceClient]
    auth_config: Optional[ProviderConfig]
    username: str
    password: str = field(repr=False)
    attributes: Dict[str, Any] = field(default_factory=dict)
    validation_data: Dict[str, Any] = field(default_factory=dict)
    client_metadata: Dict[str, str] = field(default_factory=dict)
    sign_up_result: Optional[RegistrationResult] = None
    error: Optional[AuthzError] = None

    def __post_init__(self) -> None:
        if not self.username:
            raise ValueError("Username cannot be empty")


@dataclass(frozen=True)
class SignUpOutcome:
    """Completion payload of a successful sign-up."""

    username: str
    registration: RegistrationResult
    confirmed: bool
    confirmation: Optional[Any] = None


class SignUpFlow(Flow[SignUpState, SignUpOutcome]):
    """Register, optionally confirm, then report once to the invoker."""

    machine_name = "sign_up"
    kind = FlowKind.SIGN_UP
    done_state = SignUpState.DONE
    failed_state = SignUpState.FAILED

    def __init__(
        self,
        context: SignUpContext,
        *,
        invoker: Optional[Mailbox] = None,
        event_bus: Optional[LifecycleEventBus] = None,
        flow_id: Optional[str] = None
    ):
        super().__init__(
            SignUpState.NOT_STARTED,
            invoker=invoker,
            event_bus=event_bus,
            flow_id=flow_id,
        )
        self._context = context
        self._mailbox: Mailbox[ConfirmSignUp] = Mailbox()

    @property
    def context(self) -> SignUpContext:
        return self._context

    def send(self, event: ConfirmSignUp) -> bool:
        """Deliver a confirmation code.

        Only accepted while the flow awaits confirmation; anything else is
        logged and ignored.

        Returns:
            True if the event was accepted
        """
        if self.state is not SignUpState.CONFIRMATION_PENDING or len(self._mailbox):
            logger.warning(
                "Sign-up %s ignored %s in state %s",
                self.flow_id, event.event_type, self.state.value,
            )
            self._reject(event.event_type, f"not accepted in state '{self.state.value}'")
            return False

        self._mailbox.post(event)
        return True

    def _on_failure(self, error: AuthzError) -> None:
        self._context = replace(self._context, error=error)

    async def _execute(self) -> SignUpOutcome:
        context = self._context
        if context.service is None or context.auth_config is None:
            raise ConfigurationError.not_configured("sign up")

        self._transition(SignUpState.SUBMITTING, "started")
        registration = await self._call(
            "register",
            context.service.register,
            username=context.username,
            password=context.password,
            attributes=dict(context.attributes),
            validation_data=dict(context.validation_data),
            client_metadata=dict(context.client_metadata),
            client_id=context.auth_config.client_id,
        )
        if isinstance(registration, Mapping):
            registration = RegistrationResult.from_response(registration)
        self._context = replace(self._context, sign_up_result=registration)

        if registration.user_confirmed is not False:
            return SignUpOutcome(username=context.username, registration=registration, confirmed=True)

        self._transition(SignUpState.CONFIRMATION_PENDING, "confirmation_required")
        event = await self._mailbox.receive()

        self._transition(SignUpState.CONFIRMING, event.event_type)
        confirmation = await self._call(
            "confirm_registration",
            context.service.confirm_registration,
            client_id=context.auth_config.client_id,
            code=event.confirmation_code,
            username=context.username,
        )

        return SignUpOutcome(
            username=context.username,
            registration=registration,
            confirmed=True,
            confirmation=confirmation,
        )
