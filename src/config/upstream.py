"""Upstream live-audio service configuration (env-resolved constants only)."""

from __future__ import annotations

import os

DEFAULT_UPSTREAM_SESSION_URL = "https://api.generativeai.example/v1beta/live/sessions"

UPSTREAM_SESSION_URL: str = (os.getenv("UPSTREAM_SESSION_URL") or "").strip() or DEFAULT_UPSTREAM_SESSION_URL


def _get_timeout(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return float(default)
    try:
        value = float(raw)
    except Exception:
        return float(default)
    return max(0.0, value)


# 0 disables the timeout.
UPSTREAM_HTTP_TIMEOUT_S: float = _get_timeout("UPSTREAM_HTTP_TIMEOUT_S", 10.0)
UPSTREAM_OPEN_TIMEOUT_S: float = _get_timeout("UPSTREAM_OPEN_TIMEOUT_S", 10.0)

# Keys checked, in order, for the upstream WebSocket address in the session-creation response.
UPSTREAM_ADDRESS_KEYS: tuple[str, ...] = ("wsUrl", "ws_url", "websocketUrl")

# Upstream-native frame type that interrupts in-progress generation.
UPSTREAM_INTERRUPT_TYPE: str = (os.getenv("UPSTREAM_INTERRUPT_TYPE") or "").strip() or "input.stop"

__all__ = [
    "DEFAULT_UPSTREAM_SESSION_URL",
    "UPSTREAM_ADDRESS_KEYS",
    "UPSTREAM_HTTP_TIMEOUT_S",
    "UPSTREAM_INTERRUPT_TYPE",
    "UPSTREAM_OPEN_TIMEOUT_S",
    "UPSTREAM_SESSION_URL",
]
