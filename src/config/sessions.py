"""Session registry configuration (env-resolved constants only)."""

from __future__ import annotations

import os

_DISABLED_VALUES = {"0", "none", "null", "disabled", "disable", "off", "false"}

# Seconds a created session stays claimable. 0 disables expiry.
_SESSION_TTL_RAW = (os.getenv("SESSION_TTL_S") or "").strip()
if _SESSION_TTL_RAW.lower() in _DISABLED_VALUES:
    SESSION_TTL_S: float = 0.0
else:
    try:
        SESSION_TTL_S = float(_SESSION_TTL_RAW) if _SESSION_TTL_RAW else 300.0
    except Exception:
        SESSION_TTL_S = 300.0
    if SESSION_TTL_S < 0:
        SESSION_TTL_S = 0.0

# Evict a session once a relay has opened its upstream connection.
_SINGLE_USE_RAW = (os.getenv("SESSION_SINGLE_USE") or "").strip().lower()
SESSION_SINGLE_USE: bool = _SINGLE_USE_RAW not in _DISABLED_VALUES if _SINGLE_USE_RAW else True

__all__ = ["SESSION_SINGLE_USE", "SESSION_TTL_S"]
