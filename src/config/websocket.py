"""WebSocket protocol configuration and constants."""

from __future__ import annotations

import os

WS_ENDPOINT_PATH = "/ws"
WS_SESSION_QUERY_KEY = "sessionId"

# Frame keys and server-originated frame types
WS_KEY_TYPE = "type"
WS_KEY_MESSAGE = "message"
WS_TYPE_PROXY_READY = "proxy_ready"
WS_TYPE_ERROR = "error"

# Client control frames
WS_TYPE_CONTROL = "control"
WS_KEY_ACTION = "action"
WS_ACTION_STOP = "stop"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_PROXY_ERROR_CODE = 1011
WS_CLOSE_IDLE_CODE = 4000
WS_CLOSE_BUSY_CODE = 4002
WS_CLOSE_MAX_DURATION_CODE = 4003
WS_CLOSE_INVALID_SESSION_CODE = 4004

WS_CLOSE_IDLE_REASON = "idle timeout"
WS_CLOSE_MAX_DURATION_REASON = "max connection duration reached"

# Error frame messages
WS_ERROR_INVALID_SESSION = "Invalid sessionId or session expired"
WS_ERROR_PROXY = "Proxy error"
WS_ERROR_UPSTREAM = "Remote WS error"
WS_ERROR_SERVER_AT_CAPACITY = "Server cannot accept new connections. Please try again later."


def _get_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return float(default)
    try:
        return float(raw)
    except Exception:
        return float(default)


# Idle watchdog (0 disables idle / duration enforcement)
WS_IDLE_TIMEOUT_S: float = max(0.0, _get_float("WS_IDLE_TIMEOUT_S", 150.0))
WS_WATCHDOG_TICK_S: float = _get_float("WS_WATCHDOG_TICK_S", 5.0)
if WS_WATCHDOG_TICK_S <= 0:
    WS_WATCHDOG_TICK_S = 5.0
WS_MAX_CONNECTION_DURATION_S: float = max(0.0, _get_float("WS_MAX_CONNECTION_DURATION_S", 3600.0))

__all__ = [
    "WS_ACTION_STOP",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_CLOSE_INVALID_SESSION_CODE",
    "WS_CLOSE_MAX_DURATION_CODE",
    "WS_CLOSE_MAX_DURATION_REASON",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_PROXY_ERROR_CODE",
    "WS_ENDPOINT_PATH",
    "WS_ERROR_INVALID_SESSION",
    "WS_ERROR_PROXY",
    "WS_ERROR_SERVER_AT_CAPACITY",
    "WS_ERROR_UPSTREAM",
    "WS_IDLE_TIMEOUT_S",
    "WS_KEY_ACTION",
    "WS_KEY_MESSAGE",
    "WS_KEY_TYPE",
    "WS_MAX_CONNECTION_DURATION_S",
    "WS_SESSION_QUERY_KEY",
    "WS_TYPE_CONTROL",
    "WS_TYPE_ERROR",
    "WS_TYPE_PROXY_READY",
    "WS_WATCHDOG_TICK_S",
]
