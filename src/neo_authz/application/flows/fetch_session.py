"""Session fetch sub-flow.

Resolves an identity id (unless one is already known) and exchanges it for
temporary credentials, for either a guest or a signed-in user.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...core.entities import mask_identifier
from ...core.exceptions import ConfigurationError, NetworkError, ValidationError
from ...core.protocols import CredentialServiceClient
from ...core.value_objects import CredentialSet, ProviderConfig, UserPoolTokens
from ..event_bus import LifecycleEventBus
from ..mailbox import Mailbox
from ..results import FetchedSession, FlowKind
from .base import Flow

logger = logging.getLogger(__name__)


class FetchSessionState(str, Enum):
    NOT_STARTED = "not_started"
    RESOLVING_IDENTITY = "resolving_identity"
    RESOLVING_CREDENTIALS = "resolving_credentials"
    FETCHED = "fetched"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchSessionContext:
    """Snapshot handed to a fetch flow at spawn time."""

    client_config: Optional[ProviderConfig]
    service: Optional[CredentialServiceClient]
    authenticated: bool = False
    identity_id: Optional[str] = None
    user_pool_tokens: Optional[UserPoolTokens] = None


class FetchSessionFlow(Flow[FetchSessionState, FetchedSession]):
    """Two-stage fetch: identity resolution, then credential exchange."""

    machine_name = "fetch_session"
    kind = FlowKind.FETCH
    done_state = FetchSessionState.FETCHED
    failed_state = FetchSessionState.FAILED

    def __init__(
        self,
        context: FetchSessionContext,
        *,
        invoker: Optional[Mailbox] = None,
        event_bus: Optional[LifecycleEventBus] = None,
        flow_id: Optional[str] = None
    ):
        super().__init__(
            FetchSessionState.NOT_STARTED,
            invoker=invoker,
            event_bus=event_bus,
            flow_id=flow_id,
        )
        self._context = context

    @property
    def context(self) -> FetchSessionContext:
        return self._context

    async def _execute(self) -> FetchedSession:
        context = self._context
        if context.client_config is None:
            raise ConfigurationError.not_configured("fetch session")

        if not context.client_config.has_identity_pool:
            logger.debug("No identity pool configured, fetch %s short-circuits", self.flow_id)
            self._transition(FetchSessionState.RESOLVING_CREDENTIALS, "identity_pool_absent")
            return FetchedSession(identity_id=None, credentials=None)

        if context.service is None:
            raise ConfigurationError.not_configured("fetch session")

        if context.authenticated and context.user_pool_tokens is None:
            raise ValidationError.missing_id_token("authenticated session fetch")

        identity_id = context.identity_id
        if not identity_id:
            self._transition(FetchSessionState.RESOLVING_IDENTITY, "identity_missing")
            identity_id = await self._resolve_identity()

        self._transition(FetchSessionState.RESOLVING_CREDENTIALS, "identity_resolved")
        credentials = await self._resolve_credentials(identity_id)

        return FetchedSession(identity_id=identity_id, credentials=credentials)

    async def _resolve_identity(self) -> str:
        service = self._context.service
        if self._context.authenticated:
            identity_id = await self._call(
                "resolve_authenticated_identity",
                service.resolve_authenticated_identity,
                self._context.user_pool_tokens.id_token,
            )
        else:
            identity_id = await self._call(
                "resolve_unauthenticated_identity",
                service.resolve_unauthenticated_identity,
            )

        if not identity_id:
            raise NetworkError(
                "Identity provider returned an empty identity id",
                operation="resolve_identity",
            )

        logger.debug("Fetch %s resolved identity %s", self.flow_id, mask_identifier(identity_id))
        return identity_id

    async def _resolve_credentials(self, identity_id: str) -> CredentialSet:
        service = self._context.service
        if self._context.authenticated:
            return await self._call(
                "exchange_authenticated_credentials",
                service.exchange_authenticated_credentials,
                identity_id,
                self._context.user_pool_tokens.id_token,
            )
        return await self._call(
            "exchange_unauthenticated_credentials",
            service.exchange_unauthenticated_credentials,
            identity_id,
        )
