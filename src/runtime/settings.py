"""Load runtime settings.

Configuration values are resolved from the environment in `src/config/*` and
exposed here as structured dataclasses for the rest of the server.
"""

from __future__ import annotations

from src.config.server import HOST, PORT
from src.config.secrets import GEMINI_API_KEY
from src.config.limits import MAX_CONCURRENT_CONNECTIONS
from src.config.models import MODEL_NAME, SYSTEM_INSTRUCTIONS
from src.config.sessions import SESSION_TTL_S, SESSION_SINGLE_USE
from src.config.websocket import (
    WS_IDLE_TIMEOUT_S,
    WS_WATCHDOG_TICK_S,
    WS_MAX_CONNECTION_DURATION_S,
)
from src.state.settings import (
    AppSettings,
    AuthSettings,
    ModelSettings,
    LimitsSettings,
    ServerSettings,
    SessionSettings,
    UpstreamSettings,
    WebSocketSettings,
)
from src.config.upstream import (
    UPSTREAM_SESSION_URL,
    UPSTREAM_ADDRESS_KEYS,
    UPSTREAM_HTTP_TIMEOUT_S,
    UPSTREAM_INTERRUPT_TYPE,
    UPSTREAM_OPEN_TIMEOUT_S,
)


def load_settings() -> AppSettings:
    return AppSettings(
        server=ServerSettings(host=HOST, port=PORT),
        auth=AuthSettings(upstream_api_key=GEMINI_API_KEY),
        limits=LimitsSettings(
            max_concurrent_connections=MAX_CONCURRENT_CONNECTIONS,
        ),
        websocket=WebSocketSettings(
            idle_timeout_s=WS_IDLE_TIMEOUT_S,
            watchdog_tick_s=WS_WATCHDOG_TICK_S,
            max_connection_duration_s=WS_MAX_CONNECTION_DURATION_S,
        ),
        model=ModelSettings(
            model_name=MODEL_NAME,
            system_instructions=SYSTEM_INSTRUCTIONS,
        ),
        upstream=UpstreamSettings(
            session_url=UPSTREAM_SESSION_URL,
            http_timeout_s=UPSTREAM_HTTP_TIMEOUT_S,
            open_timeout_s=UPSTREAM_OPEN_TIMEOUT_S,
            address_keys=UPSTREAM_ADDRESS_KEYS,
            interrupt_type=UPSTREAM_INTERRUPT_TYPE,
        ),
        sessions=SessionSettings(
            ttl_s=SESSION_TTL_S,
            single_use=SESSION_SINGLE_USE,
        ),
    )


__all__ = ["load_settings"]
