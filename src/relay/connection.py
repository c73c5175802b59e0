"""Per-client relay between the client WebSocket and one upstream WebSocket."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import TYPE_CHECKING
from collections.abc import Callable, Awaitable

from fastapi import WebSocket
from websockets.exceptions import ConnectionClosed, ConnectionClosedError

from src.state.session import Session
from src.errors import ForwardingError, MissingUpstreamAddress, UpstreamConnectionError
from src.config.websocket import (
    WS_KEY_TYPE,
    WS_ERROR_PROXY,
    WS_ERROR_UPSTREAM,
    WS_TYPE_PROXY_READY,
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_PROXY_ERROR_CODE,
)
from src.handlers.websocket.errors import (
    safe_close,
    send_error,
    safe_send_json,
    safe_send_text,
    safe_send_bytes,
)

from .translator import ControlTranslator
from .state import RelayState, Termination, ConnectionState
from .upstream import UpstreamSocket, UpstreamConnector, open_upstream, resolve_upstream_address

if TYPE_CHECKING:
    from src.handlers.websocket.lifecycle import WebSocketLifecycle

logger = logging.getLogger(__name__)

OnOpenFn = Callable[[Session], Awaitable[None]]

_CLIENT_TERMINATIONS = {Termination.CLIENT_CLOSED, Termination.CLIENT_ERROR, Termination.WATCHDOG}


class RelayConnection:
    """Pump frames between one accepted client socket and its upstream session.

    ``run`` never raises for connection-level failures: they are turned into an
    error frame and/or a close on the client side.
    """

    def __init__(
        self,
        *,
        ws: WebSocket,
        session: Session,
        connector: UpstreamConnector,
        translator: ControlTranslator,
        headers: dict[str, str],
        address_keys: tuple[str, ...],
        lifecycle: WebSocketLifecycle | None = None,
        on_open: OnOpenFn | None = None,
        on_open_failed: OnOpenFn | None = None,
    ) -> None:
        self._ws = ws
        self._session = session
        self._connector = connector
        self._translator = translator
        self._headers = headers
        self._address_keys = address_keys
        self._lifecycle = lifecycle
        self._on_open = on_open
        self._on_open_failed = on_open_failed
        self._upstream: UpstreamSocket | None = None
        self.state = RelayState(session_id=session.session_id)

    def _touch(self) -> None:
        if self._lifecycle is not None:
            self._lifecycle.touch()

    async def _open(self) -> UpstreamSocket:
        url = resolve_upstream_address(self._session.upstream_params, self._address_keys)
        if url is None:
            raise MissingUpstreamAddress(session_id=self._session.session_id)

        upstream = await open_upstream(self._connector, url, self._headers)
        self._upstream = upstream
        self.state.upstream = ConnectionState.OPEN
        logger.info("upstream connected session_id=%s", self._session.session_id)
        return upstream

    async def run(self) -> Termination | None:
        try:
            upstream = await self._open()
        except (MissingUpstreamAddress, UpstreamConnectionError) as exc:
            self.state.upstream = ConnectionState.CLOSED
            logger.warning("relay setup failed session_id=%s: %r", self._session.session_id, exc)
            if self._on_open_failed is not None:
                await self._on_open_failed(self._session)
            await send_error(self._ws, WS_ERROR_PROXY)
            await self._close_client(WS_CLOSE_PROXY_ERROR_CODE)
            return None

        try:
            return await self._relay(upstream)
        finally:
            if self.state.upstream is not ConnectionState.CLOSED:
                # Cancelled or failed before teardown ran; the client side goes with the handler.
                logger.info("relay aborted session_id=%s", self._session.session_id)
                await asyncio.shield(self._close_upstream())

    async def _relay(self, upstream: UpstreamSocket) -> Termination:
        await safe_send_json(self._ws, {WS_KEY_TYPE: WS_TYPE_PROXY_READY})
        if self._on_open is not None:
            await self._on_open(self._session)

        client_task = asyncio.create_task(self._pump_client_to_upstream(upstream))
        upstream_task = asyncio.create_task(self._pump_upstream_to_client(upstream))
        pumps = {client_task, upstream_task}
        pending: set[asyncio.Task] = set(pumps)
        if self._lifecycle is not None:
            pending.add(self._lifecycle.start())

        try:
            while True:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                if done & pumps:
                    termination = self._termination_from(client_task, upstream_task)
                    break
                if self._lifecycle is not None and self._lifecycle.should_close():
                    # The watchdog has already closed the client socket.
                    termination = Termination.WATCHDOG
                    break
        finally:
            for task in pumps:
                if not task.done():
                    task.cancel()
            for task in pumps:
                with contextlib.suppress(asyncio.CancelledError, Exception):
                    await task

        self.state.termination = termination
        await self._teardown(termination)
        logger.info(
            "relay closed session_id=%s reason=%s to_upstream=%d to_client=%d",
            self._session.session_id,
            termination.value,
            self.state.frames_to_upstream,
            self.state.frames_to_client,
        )
        return termination

    @staticmethod
    def _termination_from(client_task: asyncio.Task, upstream_task: asyncio.Task) -> Termination:
        # Upstream first: if both ended in the same step, the client still needs the error frame.
        if upstream_task.done():
            if upstream_task.cancelled() or upstream_task.exception() is not None:
                return Termination.UPSTREAM_ERROR
            return upstream_task.result()
        if client_task.cancelled() or client_task.exception() is not None:
            return Termination.CLIENT_ERROR
        return client_task.result()

    async def _teardown(self, termination: Termination) -> None:
        if termination in _CLIENT_TERMINATIONS:
            self.state.client = ConnectionState.CLOSED
        elif termination is Termination.UPSTREAM_ERROR:
            await send_error(self._ws, WS_ERROR_UPSTREAM)
            await self._close_client(WS_CLOSE_PROXY_ERROR_CODE)
        else:
            await self._close_client(WS_CLOSE_NORMAL_CODE)
        await self._close_upstream()

    async def _close_client(self, code: int) -> None:
        if self.state.client is ConnectionState.CLOSED:
            return
        self.state.client = ConnectionState.CLOSED
        await safe_close(self._ws, code=code)

    async def _close_upstream(self) -> None:
        if self.state.upstream is ConnectionState.CLOSED or self._upstream is None:
            self.state.upstream = ConnectionState.CLOSED
            return
        self.state.upstream = ConnectionState.CLOSED
        try:
            await self._upstream.close()
        except Exception:
            logger.debug("upstream close failed", exc_info=True)

    async def _pump_upstream_to_client(self, upstream: UpstreamSocket) -> Termination:
        try:
            async for message in upstream:
                self._touch()
                if isinstance(message, bytes | bytearray):
                    sent = await safe_send_bytes(self._ws, bytes(message))
                else:
                    sent = await safe_send_text(self._ws, message)
                if sent:
                    self.state.frames_to_client += 1
                else:
                    self._log_forwarding_error(ForwardingError(direction="upstream->client", reason="send failed"))
        except ConnectionClosedError as exc:
            logger.warning("upstream connection error session_id=%s: %s", self._session.session_id, exc)
            return Termination.UPSTREAM_ERROR
        except Exception:
            logger.exception("upstream receive failed session_id=%s", self._session.session_id)
            return Termination.UPSTREAM_ERROR
        logger.info("upstream closed session_id=%s", self._session.session_id)
        return Termination.UPSTREAM_CLOSED

    async def _pump_client_to_upstream(self, upstream: UpstreamSocket) -> Termination:
        while True:
            try:
                message = await self._ws.receive()
            except Exception:
                logger.warning("client receive failed session_id=%s", self._session.session_id, exc_info=True)
                return Termination.CLIENT_ERROR

            msg_type = message.get("type")
            if msg_type == "websocket.disconnect":
                logger.info(
                    "client closed session_id=%s code=%s", self._session.session_id, message.get("code")
                )
                return Termination.CLIENT_CLOSED
            if msg_type != "websocket.receive":
                continue

            self._touch()
            data = message.get("bytes")
            if data is not None:
                await self._send_upstream(upstream, data)
                continue
            text = message.get("text")
            if text is not None:
                await self._send_upstream(upstream, self._translator.translate_text(text))

    async def _send_upstream(self, upstream: UpstreamSocket, payload: str | bytes) -> None:
        try:
            await upstream.send(payload)
        except ConnectionClosed as exc:
            self._log_forwarding_error(ForwardingError(direction="client->upstream", reason=str(exc)))
            return
        except Exception as exc:
            logger.warning("forwarding to upstream failed session_id=%s", self._session.session_id, exc_info=True)
            self._log_forwarding_error(ForwardingError(direction="client->upstream", reason=repr(exc)))
            return
        self.state.frames_to_upstream += 1

    def _log_forwarding_error(self, err: ForwardingError) -> None:
        logger.debug(
            "frame dropped session_id=%s direction=%s reason=%s",
            self._session.session_id,
            err.direction,
            err.reason,
        )


__all__ = ["OnOpenFn", "RelayConnection"]
