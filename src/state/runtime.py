"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    import httpx

    from src.state.settings import AppSettings
    from src.relay.bridge import RelayBridge
    from src.sessions.registry import SessionRegistry
    from src.sessions.initiator import SessionInitiator
    from src.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    registry: SessionRegistry
    initiator: SessionInitiator
    relay_bridge: RelayBridge
    settings: AppSettings
    _http_client: httpx.AsyncClient

    async def shutdown(self) -> None:
        try:
            await self._http_client.aclose()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
