"""
Per-user session state: current user, reachable companies, active company.
"""

from .actor import (
    AUTH_EVENT_SIGNED_IN,
    AUTH_EVENT_SIGNED_OUT,
    SessionActor,
    SessionRegistry,
    get_session_registry,
)
from .context import SessionContext, SessionState

__all__ = [
    "AUTH_EVENT_SIGNED_IN",
    "AUTH_EVENT_SIGNED_OUT",
    "SessionActor",
    "SessionContext",
    "SessionRegistry",
    "SessionState",
    "get_session_registry",
]
