"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from src.state.runtime import RuntimeDeps
from src.errors import InvalidOrExpiredSession
from src.config.websocket import (
    WS_ERROR_PROXY,
    WS_CLOSE_BUSY_CODE,
    WS_SESSION_QUERY_KEY,
    WS_ERROR_INVALID_SESSION,
    WS_CLOSE_PROXY_ERROR_CODE,
    WS_ERROR_SERVER_AT_CAPACITY,
    WS_CLOSE_INVALID_SESSION_CODE,
)

from .lifecycle import WebSocketLifecycle
from .errors import safe_close, send_error, reject_connection

logger = logging.getLogger(__name__)


def get_session_id(ws: WebSocket) -> str | None:
    return (ws.query_params.get(WS_SESSION_QUERY_KEY) or "").strip() or None


def _create_lifecycle(ws: WebSocket, runtime_deps: RuntimeDeps) -> WebSocketLifecycle:
    settings = runtime_deps.settings.websocket
    return WebSocketLifecycle(
        ws,
        idle_timeout_s=settings.idle_timeout_s,
        watchdog_tick_s=settings.watchdog_tick_s,
        max_connection_duration_s=settings.max_connection_duration_s,
    )


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    session_id = get_session_id(ws)
    logger.info("Client connected to /ws, sessionId: %s", session_id)

    try:
        session = await runtime_deps.relay_bridge.lookup(session_id)
    except InvalidOrExpiredSession:
        logger.warning("Rejecting connection: unknown or expired sessionId=%s", session_id)
        await reject_connection(ws, message=WS_ERROR_INVALID_SESSION, close_code=WS_CLOSE_INVALID_SESSION_CODE)
        return

    if not await runtime_deps.connections.connect(ws):
        await runtime_deps.relay_bridge.release(session)
        await reject_connection(ws, message=WS_ERROR_SERVER_AT_CAPACITY, close_code=WS_CLOSE_BUSY_CODE)
        return

    lifecycle: WebSocketLifecycle | None = None
    try:
        await ws.accept()
        lifecycle = _create_lifecycle(ws, runtime_deps)
        lifecycle.start()
        logger.info("WebSocket connection accepted. Active: %s", runtime_deps.connections.get_connection_count())

        relay = runtime_deps.relay_bridge.new_connection(ws, session, lifecycle=lifecycle)
        await relay.run()
    except Exception:
        logger.exception("Proxy connection error session_id=%s", session.session_id)
        await send_error(ws, WS_ERROR_PROXY)
        await safe_close(ws, code=WS_CLOSE_PROXY_ERROR_CODE)
    finally:
        if lifecycle is not None:
            with contextlib.suppress(Exception):
                await lifecycle.stop()

        with contextlib.suppress(Exception):
            await runtime_deps.relay_bridge.release(session)

        with contextlib.suppress(Exception):
            await runtime_deps.connections.disconnect(ws)
        logger.info(
            "WebSocket connection closed session_id=%s. Active: %s",
            session.session_id,
            runtime_deps.connections.get_connection_count(),
        )


__all__ = ["get_session_id", "handle_websocket_connection"]
