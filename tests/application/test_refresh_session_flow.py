"""Tests for the session refresh flow."""

from datetime import datetime, timedelta, timezone

import pytest

from neo_authz.application import (
    RefreshSessionContext,
    RefreshSessionFlow,
    RefreshSessionState,
)
from neo_authz.core.exceptions import (
    ConfigurationError,
    InvalidSessionState,
    NetworkError,
    ValidationError,
)
from neo_authz.core.value_objects import CredentialSet

IDENTITY_ID = "us-east-1:refresh-identity-0001"


class TestRefreshSessionFlow:
    """Test credential renewal for a known identity."""

    @pytest.fixture
    def make_flow(self, provider_config, fake_service):
        def factory(**overrides):
            values = dict(
                client_config=provider_config,
                service=fake_service,
                identity_id=IDENTITY_ID,
                expiry_skew_seconds=300,
            )
            values.update(overrides)
            return RefreshSessionFlow(RefreshSessionContext(**values))
        return factory

    @pytest.mark.asyncio
    async def test_valid_credentials_take_fast_path(self, make_flow, fake_service, valid_credentials):
        flow = make_flow(credentials=valid_credentials)

        result = await flow.run()

        assert result.value.credentials is valid_credentials
        assert result.value.identity_id == IDENTITY_ID
        assert fake_service.calls == []
        assert flow.state is RefreshSessionState.REFRESHED

    @pytest.mark.asyncio
    async def test_fast_path_without_client_config(self, make_flow, fake_service,
                                                   valid_credentials):
        result = await make_flow(client_config=None, service=None,
                                 credentials=valid_credentials).run()

        assert result.value.credentials is valid_credentials
        assert fake_service.calls == []

    @pytest.mark.asyncio
    async def test_exchange_without_client_config_fails(self, make_flow, fake_service,
                                                        expired_credentials):
        result = await make_flow(client_config=None, service=None,
                                 credentials=expired_credentials).run()

        assert isinstance(result.error, ConfigurationError)
        assert fake_service.calls == []

    @pytest.mark.asyncio
    async def test_force_refresh_always_exchanges(self, make_flow, fake_service, valid_credentials):
        result = await make_flow(credentials=valid_credentials, force_refresh=True).run()

        assert result.value.credentials is not valid_credentials
        assert fake_service.calls == [("exchange_unauthenticated_credentials", (IDENTITY_ID,))]

    @pytest.mark.asyncio
    async def test_expired_credentials_are_exchanged(self, make_flow, fake_service,
                                                     expired_credentials):
        result = await make_flow(credentials=expired_credentials).run()

        assert result.value.credentials.access_key_id == "ASIAFAKEKEY0001"
        assert fake_service.call_names == ["exchange_unauthenticated_credentials"]

    @pytest.mark.asyncio
    async def test_missing_credentials_are_exchanged(self, make_flow, fake_service):
        result = await make_flow(credentials=None).run()

        assert result.ok
        assert fake_service.call_names == ["exchange_unauthenticated_credentials"]

    @pytest.mark.asyncio
    async def test_never_resolves_identity(self, make_flow, fake_service, expired_credentials):
        await make_flow(credentials=expired_credentials, force_refresh=True).run()

        assert not any(name.startswith("resolve_") for name in fake_service.call_names)

    @pytest.mark.asyncio
    async def test_authenticated_refresh(self, make_flow, fake_service, expired_credentials,
                                         user_pool_tokens):
        result = await make_flow(
            credentials=expired_credentials,
            authenticated=True,
            user_pool_tokens=user_pool_tokens,
        ).run()

        assert result.ok
        assert fake_service.calls == [
            ("exchange_authenticated_credentials", (IDENTITY_ID, user_pool_tokens.id_token)),
        ]

    @pytest.mark.asyncio
    async def test_authenticated_refresh_requires_id_token(self, make_flow, fake_service,
                                                           expired_credentials):
        result = await make_flow(credentials=expired_credentials, authenticated=True).run()

        assert isinstance(result.error, ValidationError)
        assert fake_service.calls == []

    @pytest.mark.asyncio
    async def test_missing_identity_fails(self, make_flow, fake_service, expired_credentials):
        flow = make_flow(identity_id=None, credentials=expired_credentials)

        result = await flow.run()

        assert isinstance(result.error, InvalidSessionState)
        assert flow.state is RefreshSessionState.FAILED
        assert fake_service.calls == []

    @pytest.mark.asyncio
    async def test_no_identity_pool_short_circuits(self, make_flow, fake_service,
                                                   provider_config_without_identity_pool,
                                                   expired_credentials):
        result = await make_flow(
            client_config=provider_config_without_identity_pool,
            credentials=expired_credentials,
            force_refresh=True,
        ).run()

        assert result.value.identity_id is None
        assert result.value.credentials is None
        assert fake_service.calls == []

    @pytest.mark.asyncio
    async def test_exchange_failure(self, make_flow, fake_service, expired_credentials):
        fake_service.failures["exchange_unauthenticated_credentials"] = NetworkError("denied")

        flow = make_flow(credentials=expired_credentials)
        result = await flow.run()

        assert isinstance(result.error, NetworkError)
        assert flow.state is RefreshSessionState.FAILED

    @pytest.mark.asyncio
    async def test_skew_defaults_to_settings(self, provider_config, fake_service, mocker):
        settings = mocker.MagicMock(credential_expiry_skew_seconds=3600)
        mocker.patch(
            "neo_authz.application.flows.refresh_session.get_settings",
            return_value=settings,
        )
        soon = CredentialSet(
            access_key_id="ASIASOON",
            expiration=datetime.now(timezone.utc) + timedelta(minutes=30),
        )

        result = await RefreshSessionFlow(RefreshSessionContext(
            client_config=provider_config,
            service=fake_service,
            identity_id=IDENTITY_ID,
            credentials=soon,
        )).run()

        assert result.value.credentials is not soon
        assert fake_service.call_names == ["exchange_unauthenticated_credentials"]
