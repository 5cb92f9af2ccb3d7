"""Authorization core protocols.

Contract definitions for the external collaborators the machines call.
"""

from .credential_service import CredentialServiceClient, CredentialServiceFactory
from .credential_store import CredentialStore
from .lifecycle_observer import LifecycleObserver

__all__ = [
    "CredentialServiceClient",
    "CredentialServiceFactory",
    "CredentialStore",
    "LifecycleObserver",
]
