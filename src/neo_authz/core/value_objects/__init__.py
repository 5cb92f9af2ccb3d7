"""Authorization value objects.

Immutable values exchanged between the orchestrator, its sub-flows and the
credential service client.
"""

from .provider_config import ProviderConfig
from .credential_set import CredentialSet
from .user_pool_tokens import UserPoolTokens
from .registration_result import RegistrationResult

__all__ = [
    "ProviderConfig",
    "CredentialSet",
    "UserPoolTokens",
    "RegistrationResult",
]
