"""Session records held by the registry."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ModelConfig:
    model: str
    instructions: str


@dataclass(frozen=True, slots=True)
class Session:
    """Upstream connection parameters obtained by one session-creation handshake.

    ``upstream_params`` is the remote response body, stored verbatim.
    ``created_at`` is a monotonic timestamp used for expiry.
    """

    session_id: str
    upstream_params: Any
    created_at: float
    model: str = ""


__all__ = ["ModelConfig", "Session"]
