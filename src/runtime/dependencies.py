"""Runtime dependency construction (session handshake + relay + admission control)."""

from __future__ import annotations

import logging

import httpx

from src.state import RuntimeDeps
from src.state.session import ModelConfig
from src.state.settings import AppSettings
from src.relay.bridge import RelayBridge
from src.relay.translator import ControlTranslator
from src.sessions.registry import SessionRegistry
from src.sessions.initiator import SessionInitiator
from src.handlers.connections import ConnectionManager
from src.relay.upstream import UpstreamConnector, websocket_connector

from .settings import load_settings

logger = logging.getLogger(__name__)


def _build_http_client(settings: AppSettings) -> httpx.AsyncClient:
    timeout_s = settings.upstream.http_timeout_s
    return httpx.AsyncClient(timeout=httpx.Timeout(timeout_s if timeout_s > 0 else None))


def build_runtime_deps(
    settings: AppSettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    connector: UpstreamConnector | None = None,
) -> RuntimeDeps:
    settings = settings or load_settings()
    if not settings.auth.upstream_api_key:
        logger.warning("GEMINI_API_KEY is not set; upstream calls will be unauthenticated")

    http_client = http_client or _build_http_client(settings)
    registry = SessionRegistry(ttl_s=settings.sessions.ttl_s)

    initiator = SessionInitiator(
        http_client=http_client,
        registry=registry,
        session_url=settings.upstream.session_url,
        api_key=settings.auth.upstream_api_key,
        default_model=ModelConfig(
            model=settings.model.model_name,
            instructions=settings.model.system_instructions,
        ),
    )

    relay_bridge = RelayBridge(
        registry=registry,
        connector=connector or websocket_connector(open_timeout_s=settings.upstream.open_timeout_s),
        translator=ControlTranslator(interrupt_type=settings.upstream.interrupt_type),
        api_key=settings.auth.upstream_api_key,
        address_keys=settings.upstream.address_keys,
        single_use=settings.sessions.single_use,
    )

    connections = ConnectionManager(max_connections=settings.limits.max_concurrent_connections)

    return RuntimeDeps(
        connections=connections,
        registry=registry,
        initiator=initiator,
        relay_bridge=relay_bridge,
        settings=settings,
        _http_client=http_client,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
