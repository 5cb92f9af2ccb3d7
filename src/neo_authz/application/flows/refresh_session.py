"""Session refresh sub-flow."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...config import get_settings
from ...core.exceptions import ConfigurationError, InvalidSessionState, ValidationError
from ...core.protocols import CredentialServiceClient
from ...core.value_objects import CredentialSet, ProviderConfig, UserPoolTokens
from ..event_bus import LifecycleEventBus
from ..mailbox import Mailbox
from ..results import FetchedSession, FlowKind
from .base import Flow

logger = logging.getLogger(__name__)


class RefreshSessionState(str, Enum):
    NOT_STARTED = "not_started"
    RESOLVING_CREDENTIALS = "resolving_credentials"
    REFRESHED = "refreshed"
    FAILED = "failed"


@dataclass(frozen=True)
class RefreshSessionContext:
    """Snapshot handed to a refresh flow at spawn time.

    ``expiry_skew_seconds`` defaults to the configured
    ``credential_expiry_skew_seconds`` when left unset.
    """

    client_config: Optional[ProviderConfig]
    service: Optional[CredentialServiceClient]
    identity_id: Optional[str]
    credentials: Optional[CredentialSet] = None
    authenticated: bool = False
    user_pool_tokens: Optional[UserPoolTokens] = None
    force_refresh: bool = False
    expiry_skew_seconds: Optional[int] = None


class RefreshSessionFlow(Flow[RefreshSessionState, FetchedSession]):
    """Renews credentials for an already resolved identity.

    Identity resolution never happens here. Unless forced, credentials that
    are still valid are returned as they are without any network call.
    """

    machine_name = "refresh_session"
    kind = FlowKind.REFRESH
    done_state = RefreshSessionState.REFRESHED
    failed_state = RefreshSessionState.FAILED

    def __init__(
        self,
        context: RefreshSessionContext,
        *,
        invoker: Optional[Mailbox] = None,
        event_bus: Optional[LifecycleEventBus] = None,
        flow_id: Optional[str] = None
    ):
        super().__init__(
            RefreshSessionState.NOT_STARTED,
            invoker=invoker,
            event_bus=event_bus,
            flow_id=flow_id,
        )
        self._context = context

    @property
    def context(self) -> RefreshSessionContext:
        return self._context

    def _credentials_still_valid(self) -> bool:
        credentials = self._context.credentials
        if credentials is None:
            return False

        skew = self._context.expiry_skew_seconds
        if skew is None:
            skew = get_settings().credential_expiry_skew_seconds
        return not credentials.is_expired(skew)

    async def _execute(self) -> FetchedSession:
        context = self._context
        if context.client_config is not None and not context.client_config.has_identity_pool:
            logger.debug("No identity pool configured, refresh %s short-circuits", self.flow_id)
            return FetchedSession(identity_id=None, credentials=None)

        # A cached session adopted without configuration can still be reused
        if not context.force_refresh and self._credentials_still_valid():
            logger.debug("Refresh %s reusing unexpired credentials", self.flow_id)
            return FetchedSession(identity_id=context.identity_id, credentials=context.credentials)

        if context.client_config is None:
            raise ConfigurationError.not_configured("refresh session")

        if not context.identity_id:
            raise InvalidSessionState.missing_identity()

        if context.service is None:
            raise ConfigurationError.not_configured("refresh session")

        self._transition(RefreshSessionState.RESOLVING_CREDENTIALS, "credentials_stale")

        if context.authenticated:
            if context.user_pool_tokens is None:
                raise ValidationError.missing_id_token("authenticated session refresh")
            credentials = await self._call(
                "exchange_authenticated_credentials",
                context.service.exchange_authenticated_credentials,
                context.identity_id,
                context.user_pool_tokens.id_token,
            )
        else:
            credentials = await self._call(
                "exchange_unauthenticated_credentials",
                context.service.exchange_unauthenticated_credentials,
                context.identity_id,
            )

        return FetchedSession(identity_id=context.identity_id, credentials=credentials)
