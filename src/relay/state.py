"""Per-bridge connection state."""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class Termination(str, Enum):
    """Which event ended the relay."""

    CLIENT_CLOSED = "client_closed"
    CLIENT_ERROR = "client_error"
    UPSTREAM_CLOSED = "upstream_closed"
    UPSTREAM_ERROR = "upstream_error"
    WATCHDOG = "watchdog"


@dataclass(slots=True)
class RelayState:
    session_id: str
    client: ConnectionState = ConnectionState.OPEN
    upstream: ConnectionState = ConnectionState.CONNECTING
    frames_to_upstream: int = 0
    frames_to_client: int = 0
    termination: Termination | None = None


__all__ = ["ConnectionState", "RelayState", "Termination"]
