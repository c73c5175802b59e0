"""Run the relay with uvicorn on HOST:PORT.

Usage: python -m src.scripts.serve
"""

from __future__ import annotations

import uvicorn

from src.config.server import HOST, PORT
from src.config.logging import LOG_LEVEL


def main() -> int:
    uvicorn.run("src.server:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
