"""Log noise filters for third-party libraries.

The relay talks to the upstream service through ``httpx`` and ``websockets``,
both of which log every request/frame at DEBUG/INFO. Keep them at WARNING
unless explicitly enabled.
"""

from __future__ import annotations

import logging

from src.config.logging import SHOW_CLIENT_LOGS

_CLIENT_LOGGERS = ("httpx", "httpcore", "websockets", "websockets.client")


def configure() -> None:
    if SHOW_CLIENT_LOGS:
        return
    for name in _CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure"]
