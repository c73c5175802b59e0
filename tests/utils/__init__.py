"""Test helpers.

- fakes.py: in-memory client/upstream WebSockets and connectors
- settings.py: AppSettings builder with test-friendly defaults
"""

from __future__ import annotations

from .settings import make_settings
from .fakes import (
    FakeConnector,
    FakeUpstream,
    FakeClientWebSocket,
    wait_until,
)

__all__ = [
    "FakeClientWebSocket",
    "FakeConnector",
    "FakeUpstream",
    "make_settings",
    "wait_until",
]
