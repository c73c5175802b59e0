"""Configuration module exports (env-resolved constants only)."""

from .limits import (
    MAX_CONCURRENT_CONNECTIONS,
)
from .models import MODEL_NAME
from .server import HOST, PORT

__all__ = [
    "HOST",
    "MAX_CONCURRENT_CONNECTIONS",
    "MODEL_NAME",
    "PORT",
]
