"""Sub-flow completion payloads."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from ..core.exceptions import AuthzError
from ..core.value_objects import CredentialSet

T = TypeVar("T")


class FlowKind(str, Enum):
    """Kinds of sub-flow a parent machine can spawn."""
    FETCH = "fetch_session"
    REFRESH = "refresh_session"
    SIGN_UP = "sign_up"


# Flows that write the orchestrator's session; never more than one in flight
SESSION_FLOW_KINDS = frozenset({FlowKind.FETCH, FlowKind.REFRESH})


@dataclass(frozen=True)
class FlowResult(Generic[T]):
    """Success payload or typed error reported once by a finished flow."""

    value: Optional[T] = None
    error: Optional[AuthzError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FlowResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: AuthzError) -> "FlowResult[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the payload or raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value


@dataclass(frozen=True)
class FetchedSession:
    """Completion payload of the fetch and refresh flows."""

    identity_id: Optional[str]
    credentials: Optional[CredentialSet]
