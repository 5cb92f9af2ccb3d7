"""Cached session storage protocol contract."""

from typing import Optional, Protocol, runtime_checkable

from ..entities import SessionInfo


@runtime_checkable
class CredentialStore(Protocol):
    """Protocol for the secure storage holding a previously persisted session.

    Defines ONLY the read side used to short-circuit session establishment.
    Persisting sessions is the storage layer's responsibility.
    """

    async def load(self) -> Optional[SessionInfo]:
        """Load the persisted session, if any.

        Returns:
            Cached session info or None when nothing is stored
        """
        ...
