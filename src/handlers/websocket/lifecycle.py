"""Per-connection WebSocket lifecycle helpers (idle and duration enforcement)."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

from src.config.websocket import (
    WS_IDLE_TIMEOUT_S,
    WS_CLOSE_IDLE_CODE,
    WS_WATCHDOG_TICK_S,
    WS_CLOSE_IDLE_REASON,
    WS_CLOSE_MAX_DURATION_CODE,
    WS_CLOSE_MAX_DURATION_REASON,
    WS_MAX_CONNECTION_DURATION_S,
)

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]


class WebSocketLifecycle:
    """Close the client socket when it has been idle, or open, for too long.

    Any relayed frame, in either direction, counts as activity.
    """

    def __init__(
        self,
        websocket: Any,
        *,
        idle_timeout_s: float | None = None,
        watchdog_tick_s: float | None = None,
        max_connection_duration_s: float | None = None,
        now_fn: TimeFn | None = None,
    ) -> None:
        self._ws = websocket
        self._now = now_fn or time.monotonic
        self._idle_timeout_s = float(WS_IDLE_TIMEOUT_S if idle_timeout_s is None else idle_timeout_s)
        self._watchdog_tick_s = float(WS_WATCHDOG_TICK_S if watchdog_tick_s is None else watchdog_tick_s)
        self._max_connection_duration_s = float(
            WS_MAX_CONNECTION_DURATION_S if max_connection_duration_s is None else max_connection_duration_s
        )
        self._connection_start = self._now()
        self._last_activity = self._connection_start
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None
        self.close_code: int | None = None

    @property
    def enabled(self) -> bool:
        return self._idle_timeout_s > 0 or self._max_connection_duration_s > 0

    def touch(self) -> None:
        self._last_activity = self._now()

    def should_close(self) -> bool:
        return self.close_code is not None

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._watchdog_loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await self._task
        self._task = None

    def _expired(self) -> tuple[int, str] | None:
        now = self._now()
        if self._max_connection_duration_s > 0 and (now - self._connection_start) >= self._max_connection_duration_s:
            return WS_CLOSE_MAX_DURATION_CODE, WS_CLOSE_MAX_DURATION_REASON
        if self._idle_timeout_s > 0 and (now - self._last_activity) >= self._idle_timeout_s:
            return WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON
        return None

    async def _watchdog_loop(self) -> None:
        if not self.enabled:
            await self._stop_event.wait()
            return
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._watchdog_tick_s)
                if self._stop_event.is_set():
                    break
                expired = self._expired()
                if expired is None:
                    continue
                code, reason = expired
                logger.info("WebSocket %s; closing connection", reason)
                self.close_code = code
                self._stop_event.set()
                with contextlib.suppress(Exception):
                    await self._ws.close(code=code, reason=reason)
                break
        except asyncio.CancelledError:
            return
        except Exception:
            logger.debug("idle watchdog exiting due to unexpected error", exc_info=True)


__all__ = ["WebSocketLifecycle"]
