"""Credential service client protocol contract."""

from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable

from ..value_objects import CredentialSet, ProviderConfig, RegistrationResult


@runtime_checkable
class CredentialServiceClient(Protocol):
    """Protocol for the identity provider network client.

    Defines ONLY the operations the session flows call. Implementations own
    the transport, request signing and any retry policy; flows never retry.
    Every operation raises ``NetworkError`` on transport or service failure,
    and registration operations raise ``ValidationError`` when the provider
    rejects the request.
    """

    async def resolve_unauthenticated_identity(self) -> str:
        """Resolve a guest identity id from the identity pool.

        Returns:
            Identity identifier

        Raises:
            NetworkError: If the call fails
        """
        ...

    async def resolve_authenticated_identity(self, id_token: str) -> str:
        """Resolve the identity id bound to a signed-in user.

        Args:
            id_token: User pool id token proving the sign-in

        Returns:
            Identity identifier

        Raises:
            NetworkError: If the call fails
        """
        ...

    async def exchange_unauthenticated_credentials(self, identity_id: str) -> CredentialSet:
        """Exchange a guest identity id for temporary credentials.

        Raises:
            NetworkError: If the call fails
        """
        ...

    async def exchange_authenticated_credentials(
        self,
        identity_id: str,
        id_token: str
    ) -> CredentialSet:
        """Exchange an authenticated identity id for temporary credentials.

        Raises:
            NetworkError: If the call fails
        """
        ...

    async def register(
        self,
        username: str,
        password: str,
        attributes: Dict[str, Any],
        validation_data: Dict[str, Any],
        client_metadata: Dict[str, str],
        client_id: str
    ) -> RegistrationResult:
        """Register a new user in the user pool.

        Returns:
            Registration result; ``user_confirmed`` is False when a
            confirmation code must be supplied

        Raises:
            ValidationError: If the provider rejects the registration
            NetworkError: If the call fails
        """
        ...

    async def confirm_registration(
        self,
        client_id: str,
        code: str,
        username: str
    ) -> Optional[Any]:
        """Confirm a registration with the code delivered to the user.

        Returns:
            Provider acknowledgement

        Raises:
            ValidationError: If the code is rejected
            NetworkError: If the call fails
        """
        ...


CredentialServiceFactory = Callable[[ProviderConfig], CredentialServiceClient]
