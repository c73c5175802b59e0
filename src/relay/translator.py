"""Client control frame translation into upstream-bound frames."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable

import orjson

from src.config.websocket import WS_KEY_TYPE, WS_ACTION_STOP

from .frames import ClientFrame, ControlFrame, StructuredFrame, UnparseableFrame, parse_client_frame

logger = logging.getLogger(__name__)

ActionFn = Callable[[dict[str, Any]], dict[str, Any]]


def _dumps(fields: dict[str, Any]) -> str:
    return orjson.dumps(fields).decode("utf-8")


class ControlTranslator:
    """Map client text frames to the text sent upstream.

    Control actions with a registered mapping are replaced by the mapped frame.
    Every other JSON object is re-serialized with its fields untouched, and
    text that is not a JSON object is returned as-is.
    """

    def __init__(self, *, interrupt_type: str, actions: dict[str, ActionFn] | None = None) -> None:
        self._actions: dict[str, ActionFn] = {
            WS_ACTION_STOP: lambda _fields: {WS_KEY_TYPE: interrupt_type},
        }
        if actions:
            self._actions.update(actions)

    def register(self, action: str, fn: ActionFn) -> None:
        self._actions[action] = fn

    def translate(self, frame: ClientFrame) -> str:
        if isinstance(frame, UnparseableFrame):
            logger.warning("Invalid client JSON message; forwarding as text")
            return frame.raw
        if isinstance(frame, ControlFrame):
            fn = self._actions.get(frame.action)
            if fn is None:
                return _dumps(frame.fields)
            return _dumps(fn(frame.fields))
        if isinstance(frame, StructuredFrame):
            return _dumps(frame.fields)
        raise TypeError(f"unsupported client frame: {type(frame).__name__}")

    def translate_text(self, raw: str) -> str:
        return self.translate(parse_client_frame(raw))


__all__ = ["ActionFn", "ControlTranslator"]
