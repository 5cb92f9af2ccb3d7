"""Pytest configuration and fixtures for neo-authz tests."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio

from neo_authz.application import AuthorizationOrchestrator
from neo_authz.config import AuthzSettings
from neo_authz.core.entities import SessionInfo
from neo_authz.core.value_objects import (
    CredentialSet,
    ProviderConfig,
    RegistrationResult,
    UserPoolTokens,
)

GUEST_IDENTITY_ID = "us-east-1:0b6c1a52-guest-4b1e-9c7d-000000000001"
USER_IDENTITY_ID = "us-east-1:7f3e9d10-user-4e2a-8a11-000000000002"


class FakeCredentialService:
    """In-memory CredentialServiceClient that records every call.

    ``failures`` maps an operation name to the exception it raises;
    ``hold(name)`` returns an event the operation waits on before answering.
    """

    def __init__(
        self,
        guest_identity_id: str = GUEST_IDENTITY_ID,
        user_identity_id: str = USER_IDENTITY_ID,
        registration: Optional[RegistrationResult] = None
    ):
        self.guest_identity_id = guest_identity_id
        self.user_identity_id = user_identity_id
        self.registration = registration or RegistrationResult(
            user_confirmed=False,
            raw={"UserConfirmed": False, "UserSub": "sub-0001"},
        )
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.failures: Dict[str, BaseException] = {}
        self.gates: Dict[str, asyncio.Event] = {}
        self._issued = 0

    @property
    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def hold(self, operation: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[operation] = gate
        return gate

    async def _record(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, args))
        gate = self.gates.get(operation)
        if gate is not None:
            await gate.wait()
        if operation in self.failures:
            raise self.failures[operation]

    def _issue(self) -> CredentialSet:
        self._issued += 1
        return CredentialSet(
            access_key_id=f"ASIAFAKEKEY{self._issued:04d}",
            secret_access_key=f"secret-{self._issued}",
            session_token=f"token-{self._issued}",
            expiration=datetime.now(timezone.utc) + timedelta(hours=1),
        )

    async def resolve_unauthenticated_identity(self) -> str:
        await self._record("resolve_unauthenticated_identity")
        return self.guest_identity_id

    async def resolve_authenticated_identity(self, id_token: str) -> str:
        await self._record("resolve_authenticated_identity", id_token)
        return self.user_identity_id

    async def exchange_unauthenticated_credentials(self, identity_id: str) -> CredentialSet:
        await self._record("exchange_unauthenticated_credentials", identity_id)
        return self._issue()

    async def exchange_authenticated_credentials(self, identity_id: str, id_token: str) -> CredentialSet:
        await self._record("exchange_authenticated_credentials", identity_id, id_token)
        return self._issue()

    async def register(self, username, password, attributes, validation_data,
                       client_metadata, client_id) -> RegistrationResult:
        await self._record("register", username, client_id, attributes)
        return self.registration

    async def confirm_registration(self, client_id: str, code: str, username: str) -> Dict[str, Any]:
        await self._record("confirm_registration", client_id, code, username)
        return {"confirmed": True}


class RecordingObserver:
    """Lifecycle observer that keeps every event it receives."""

    def __init__(self):
        self.events: List[Any] = []

    def notify(self, event) -> None:
        self.events.append(event)

    def of_type(self, event_type: str) -> List[Any]:
        return [e for e in self.events if e.event_type == event_type]


class StaticCredentialStore:
    """CredentialStore returning a fixed session (or nothing)."""

    def __init__(self, session_info: Optional[SessionInfo] = None):
        self.session_info = session_info
        self.loads = 0

    async def load(self) -> Optional[SessionInfo]:
        self.loads += 1
        return self.session_info


@pytest.fixture
def provider_config():
    """Provider configuration with an identity pool."""
    return ProviderConfig(
        region="us-east-1",
        user_pool_id="us-east-1_AbCdEf123",
        identity_pool_id="us-east-1:11111111-2222-3333-4444-555555555555",
        client_id="3n4b5urk1ft4fl3mg5e62d9ado",
    )


@pytest.fixture
def provider_config_without_identity_pool():
    """Provider configuration for a user pool only setup."""
    return ProviderConfig(
        region="us-east-1",
        user_pool_id="us-east-1_AbCdEf123",
        client_id="3n4b5urk1ft4fl3mg5e62d9ado",
    )


@pytest.fixture
def user_pool_tokens():
    return UserPoolTokens(id_token="eyJ.id-token.sig", access_token="eyJ.access.sig")


@pytest.fixture
def valid_credentials():
    return CredentialSet(
        access_key_id="ASIAVALIDKEY0001",
        secret_access_key="secret",
        session_token="token",
        expiration=datetime.now(timezone.utc) + timedelta(hours=1),
    )


@pytest.fixture
def expired_credentials():
    return CredentialSet(
        access_key_id="ASIAEXPIREDKEY01",
        secret_access_key="secret",
        session_token="token",
        expiration=datetime.now(timezone.utc) - timedelta(minutes=5),
    )


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return AuthzSettings(_env_file=None, credential_expiry_skew_seconds=300)


@pytest.fixture
def fake_service():
    return FakeCredentialService()


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def service_factory(fake_service):
    """Factory recording the configs it was called with."""
    configs: List[ProviderConfig] = []

    def factory(config: ProviderConfig) -> FakeCredentialService:
        configs.append(config)
        return fake_service

    factory.configs = configs
    return factory


@pytest_asyncio.fixture
async def orchestrator(service_factory, observer, settings):
    """Running orchestrator wired to the fake service."""
    authz = AuthorizationOrchestrator(service_factory, observers=[observer], settings=settings)
    authz.start()
    yield authz
    await authz.aclose()


@pytest.fixture
def empty_store():
    return StaticCredentialStore()


@pytest.fixture
def cached_store(valid_credentials):
    """Store holding a previously persisted authenticated session."""
    return StaticCredentialStore(
        SessionInfo(identity_id=USER_IDENTITY_ID, credentials=valid_credentials, authenticated=True)
    )


@pytest.fixture
def wait_until():
    """Poll a predicate until it holds, failing after ``timeout`` seconds."""
    async def wait(predicate, timeout: float = 1.0) -> None:
        async def poll():
            while not predicate():
                await asyncio.sleep(0.001)
        await asyncio.wait_for(poll(), timeout)
    return wait
