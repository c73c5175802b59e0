"""Send/close helpers for the client-facing WebSocket."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect

from src.config.websocket import WS_KEY_TYPE, WS_TYPE_ERROR, WS_KEY_MESSAGE

logger = logging.getLogger(__name__)


def build_error_frame(message: str) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_TYPE_ERROR, WS_KEY_MESSAGE: message}


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_bytes(ws: WebSocket, data: bytes) -> bool:
    try:
        await ws.send_bytes(data)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_json(ws: WebSocket, data: dict[str, Any]) -> bool:
    return await safe_send_text(ws, orjson.dumps(data).decode("utf-8"))


async def send_error(ws: WebSocket, message: str) -> bool:
    return await safe_send_json(ws, build_error_frame(message))


async def safe_close(ws: WebSocket, *, code: int, reason: str | None = None) -> None:
    try:
        await ws.close(code=code, reason=reason)
    except Exception:
        # Already closed or the transport is gone.
        logger.debug("WebSocket close failed", exc_info=True)


async def reject_connection(
    ws: WebSocket,
    *,
    message: str,
    close_code: int,
) -> None:
    # Accept so we can send a structured error, then close.
    try:
        await ws.accept()
    except Exception:
        # If accept fails, nothing else to do.
        return
    await send_error(ws, message)
    await safe_close(ws, code=close_code, reason=message)


__all__ = [
    "build_error_frame",
    "reject_connection",
    "safe_close",
    "safe_send_bytes",
    "safe_send_json",
    "safe_send_text",
    "send_error",
]
