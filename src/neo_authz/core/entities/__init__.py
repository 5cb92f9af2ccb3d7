"""Authorization domain entities."""

from .session_info import SessionInfo, mask_identifier

__all__ = [
    "SessionInfo",
    "mask_identifier",
]
