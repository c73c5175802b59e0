"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    port: int


@dataclass(frozen=True, slots=True)
class AuthSettings:
    upstream_api_key: str


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    idle_timeout_s: float
    watchdog_tick_s: float
    max_connection_duration_s: float


@dataclass(frozen=True, slots=True)
class ModelSettings:
    model_name: str
    system_instructions: str


@dataclass(frozen=True, slots=True)
class UpstreamSettings:
    session_url: str
    http_timeout_s: float
    open_timeout_s: float
    address_keys: tuple[str, ...]
    interrupt_type: str


@dataclass(frozen=True, slots=True)
class SessionSettings:
    ttl_s: float
    single_use: bool


@dataclass(frozen=True, slots=True)
class AppSettings:
    server: ServerSettings
    auth: AuthSettings
    limits: LimitsSettings
    websocket: WebSocketSettings
    model: ModelSettings
    upstream: UpstreamSettings
    sessions: SessionSettings


__all__ = [
    "AppSettings",
    "AuthSettings",
    "LimitsSettings",
    "ModelSettings",
    "ServerSettings",
    "SessionSettings",
    "UpstreamSettings",
    "WebSocketSettings",
]
