"""Factory pairing accepted client sockets with upstream sessions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import WebSocket

from src.state.session import Session
from src.errors import InvalidOrExpiredSession
from src.sessions.registry import SessionRegistry

from .translator import ControlTranslator
from .connection import RelayConnection
from .upstream import UpstreamConnector, build_upstream_headers

if TYPE_CHECKING:
    from src.handlers.websocket.lifecycle import WebSocketLifecycle

logger = logging.getLogger(__name__)


class RelayBridge:
    def __init__(
        self,
        *,
        registry: SessionRegistry,
        connector: UpstreamConnector,
        translator: ControlTranslator,
        api_key: str,
        address_keys: tuple[str, ...],
        single_use: bool = True,
    ) -> None:
        self._registry = registry
        self._connector = connector
        self._translator = translator
        self._headers = build_upstream_headers(api_key)
        self._address_keys = address_keys
        self._single_use = single_use

    async def lookup(self, session_id: str | None) -> Session:
        """Resolve a session for a new connection.

        With single-use on, the entry is claimed so no concurrent connection can
        bridge it; call ``release`` once the connection ends.
        """
        if self._single_use:
            session = await self._registry.claim(session_id)
        else:
            session = await self._registry.get(session_id)
        if session is None:
            raise InvalidOrExpiredSession(session_id=session_id)
        return session

    async def release(self, session: Session) -> None:
        # No-op once the entry was consumed on a successful open.
        if self._single_use:
            await self._registry.release(session.session_id)

    async def _consume(self, session: Session) -> None:
        if await self._registry.discard(session.session_id):
            logger.debug("session consumed session_id=%s", session.session_id)

    def new_connection(
        self,
        ws: WebSocket,
        session: Session,
        *,
        lifecycle: WebSocketLifecycle | None = None,
    ) -> RelayConnection:
        return RelayConnection(
            ws=ws,
            session=session,
            connector=self._connector,
            translator=self._translator,
            headers=self._headers,
            address_keys=self._address_keys,
            lifecycle=lifecycle,
            on_open=self._consume if self._single_use else None,
            on_open_failed=self.release if self._single_use else None,
        )


__all__ = ["RelayBridge"]
