"""Simulator package.

Produces realistic `ping` / `traceroute` transcripts without touching the network.

Public helpers (imported in tests):
    PingSession: one cancellable simulated run (steps / lines / alines)
    run_session: drive a session into a line sink
    SessionConfig: validated session inputs
"""

from .config import SessionConfig  # noqa: F401
from .errors import InvalidAddressError, SessionStateError  # noqa: F401
from .session import CancelToken, Pacer, Pause, PingSession, run_session  # noqa: F401
