"""In-memory stand-ins for the client and upstream WebSockets."""

from __future__ import annotations

import asyncio
from typing import Any
from collections.abc import Callable

import orjson
from websockets.exceptions import ConnectionClosedOK, ConnectionClosedError

_CLOSE = object()
_ERROR = object()


async def wait_until(predicate: Callable[[], bool], *, timeout: float = 1.0) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.005)

    await asyncio.wait_for(_poll(), timeout=timeout)


class FakeClientWebSocket:
    """Mimics the parts of starlette's WebSocket the relay uses."""

    def __init__(self, query_params: dict[str, str] | None = None) -> None:
        self.query_params = dict(query_params or {})
        self.sent: list[str | bytes] = []
        self.accepted = False
        self.close_code: int | None = None
        self.close_reason: str | None = None
        self.closed = asyncio.Event()
        self._inbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    def feed_text(self, text: str) -> None:
        self._inbox.put_nowait({"type": "websocket.receive", "text": text})

    def feed_bytes(self, data: bytes) -> None:
        self._inbox.put_nowait({"type": "websocket.receive", "bytes": data})

    def feed_disconnect(self, code: int = 1000) -> None:
        self._inbox.put_nowait({"type": "websocket.disconnect", "code": code})

    async def accept(self) -> None:
        self.accepted = True

    async def receive(self) -> dict[str, Any]:
        return await self._inbox.get()

    async def send_text(self, text: str) -> None:
        if self.closed.is_set():
            raise RuntimeError("Cannot call 'send' once a close message has been sent.")
        self.sent.append(text)

    async def send_bytes(self, data: bytes) -> None:
        if self.closed.is_set():
            raise RuntimeError("Cannot call 'send' once a close message has been sent.")
        self.sent.append(data)

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.close_code = code
        self.close_reason = reason or ""
        self.closed.set()

    def sent_json(self) -> list[Any]:
        return [orjson.loads(m) for m in self.sent if isinstance(m, str)]


class FakeUpstream:
    """Scriptable upstream socket. With echo=True every sent frame comes back."""

    def __init__(self, *, echo: bool = False, fail_sends: bool = False) -> None:
        self.echo = echo
        self.fail_sends = fail_sends
        self.sent: list[str | bytes] = []
        self.closed = False
        self.close_calls = 0
        self._inbox: asyncio.Queue[Any] = asyncio.Queue()

    def feed(self, message: str | bytes) -> None:
        self._inbox.put_nowait(message)

    def finish(self) -> None:
        self._inbox.put_nowait(_CLOSE)

    def fail(self) -> None:
        self._inbox.put_nowait(_ERROR)

    async def send(self, message: str | bytes) -> None:
        if self.closed or self.fail_sends:
            raise ConnectionClosedOK(None, None)
        self.sent.append(message)
        if self.echo:
            self._inbox.put_nowait(message)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        self.close_calls += 1
        if not self.closed:
            self.closed = True
            self._inbox.put_nowait(_CLOSE)

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        while True:
            item = await self._inbox.get()
            if item is _CLOSE:
                return
            if item is _ERROR:
                raise ConnectionClosedError(None, None)
            yield item


class FakeConnector:
    """Records connect attempts; returns a prepared upstream or raises."""

    def __init__(
        self,
        upstream: FakeUpstream | None = None,
        *,
        error: Exception | None = None,
        factory: Callable[[], FakeUpstream] | None = None,
        delay_s: float = 0.0,
    ) -> None:
        self._upstream = upstream
        self._error = error
        self._factory = factory
        self._delay_s = delay_s
        self.calls: list[tuple[str, dict[str, str]]] = []
        self.upstreams: list[FakeUpstream] = []

    async def __call__(self, url: str, headers: dict[str, str]) -> FakeUpstream:
        self.calls.append((url, dict(headers)))
        if self._delay_s > 0:
            await asyncio.sleep(self._delay_s)
        if self._error is not None:
            raise self._error
        upstream = self._upstream if self._upstream is not None else (self._factory or FakeUpstream)()
        self.upstreams.append(upstream)
        return upstream


__all__ = ["FakeClientWebSocket", "FakeConnector", "FakeUpstream", "wait_until"]
