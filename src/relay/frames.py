"""Classification of client-originated text frames."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass

import orjson

from src.config.websocket import WS_KEY_TYPE, WS_KEY_ACTION, WS_TYPE_CONTROL


@dataclass(frozen=True, slots=True)
class ControlFrame:
    """A ``{"type": "control", "action": ...}`` object."""

    action: str
    fields: dict[str, Any]


@dataclass(frozen=True, slots=True)
class StructuredFrame:
    fields: dict[str, Any]


@dataclass(frozen=True, slots=True)
class UnparseableFrame:
    """Text that is not a JSON object. Forwarded upstream verbatim."""

    raw: str


ClientFrame = ControlFrame | StructuredFrame | UnparseableFrame


def parse_client_frame(raw: str) -> ClientFrame:
    try:
        parsed = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return UnparseableFrame(raw=raw)

    if not isinstance(parsed, dict):
        return UnparseableFrame(raw=raw)

    action = parsed.get(WS_KEY_ACTION)
    if parsed.get(WS_KEY_TYPE) == WS_TYPE_CONTROL and isinstance(action, str):
        return ControlFrame(action=action, fields=parsed)
    return StructuredFrame(fields=parsed)


__all__ = ["ClientFrame", "ControlFrame", "StructuredFrame", "UnparseableFrame", "parse_client_frame"]
