"""Upstream WebSocket resolution and opening."""

from __future__ import annotations

import logging
from typing import Any, Protocol
from collections.abc import Callable, Awaitable, AsyncIterator

from websockets.asyncio.client import connect

from src.errors import UpstreamConnectionError

logger = logging.getLogger(__name__)


class UpstreamSocket(Protocol):
    async def send(self, message: str | bytes) -> None: ...

    async def close(self, code: int = 1000, reason: str = "") -> None: ...

    def __aiter__(self) -> AsyncIterator[str | bytes]: ...


UpstreamConnector = Callable[[str, dict[str, str]], Awaitable[UpstreamSocket]]


def resolve_upstream_address(params: Any, keys: tuple[str, ...]) -> str | None:
    if not isinstance(params, dict):
        return None
    for key in keys:
        value = params.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def build_upstream_headers(api_key: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}


def websocket_connector(*, open_timeout_s: float) -> UpstreamConnector:
    async def _connect(url: str, headers: dict[str, str]) -> UpstreamSocket:
        # Audio frames can be large; the upstream enforces its own limits.
        return await connect(
            url,
            additional_headers=headers,
            max_size=None,
            open_timeout=open_timeout_s if open_timeout_s > 0 else None,
        )

    return _connect


async def open_upstream(connector: UpstreamConnector, url: str, headers: dict[str, str]) -> UpstreamSocket:
    try:
        return await connector(url, headers)
    except Exception as exc:
        raise UpstreamConnectionError(url=url, reason=str(exc) or type(exc).__name__) from exc


__all__ = [
    "UpstreamConnector",
    "UpstreamSocket",
    "build_upstream_headers",
    "open_upstream",
    "resolve_upstream_address",
    "websocket_connector",
]
