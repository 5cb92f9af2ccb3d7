"""Sub-flows spawned by the authorization orchestrator."""

from .base import Flow
from .fetch_session import FetchSessionContext, FetchSessionFlow, FetchSessionState
from .refresh_session import RefreshSessionContext, RefreshSessionFlow, RefreshSessionState
from .sign_up import SignUpContext, SignUpFlow, SignUpOutcome, SignUpState

__all__ = [
    "Flow",
    "FetchSessionContext",
    "FetchSessionFlow",
    "FetchSessionState",
    "RefreshSessionContext",
    "RefreshSessionFlow",
    "RefreshSessionState",
    "SignUpContext",
    "SignUpFlow",
    "SignUpOutcome",
    "SignUpState",
]
