from __future__ import annotations

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

TEST_API_KEY = "test-key"
TEST_SESSION_URL = "https://upstream.test/v1beta/live/sessions"
TEST_UPSTREAM_WS_URL = "wss://upstream.test/live/abc"


def make_settings(
    *,
    max_concurrent_connections: int = 10,
    ttl_s: float = 300.0,
    single_use: bool = True,
    idle_timeout_s: float = 0.0,
    max_connection_duration_s: float = 0.0,
) -> AppSettings:
    return AppSettings(
        server=ServerSettings(host="127.0.0.1", port=3000),
        auth=AuthSettings(upstream_api_key=TEST_API_KEY),
        limits=LimitsSettings(max_concurrent_connections=max_concurrent_connections),
        websocket=WebSocketSettings(
            idle_timeout_s=idle_timeout_s,
            watchdog_tick_s=0.01,
            max_connection_duration_s=max_connection_duration_s,
        ),
        model=ModelSettings(model_name="test-model", system_instructions="Talk about bikes."),
        upstream=UpstreamSettings(
            session_url=TEST_SESSION_URL,
            http_timeout_s=5.0,
            open_timeout_s=5.0,
            address_keys=("wsUrl", "ws_url", "websocketUrl"),
            interrupt_type="input.stop",
        ),
        sessions=SessionSettings(ttl_s=ttl_s, single_use=single_use),
    )


__all__ = ["TEST_API_KEY", "TEST_SESSION_URL", "TEST_UPSTREAM_WS_URL", "make_settings"]
