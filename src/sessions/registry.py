"""In-memory session registry with optional expiry."""

from __future__ import annotations

import time
import asyncio
import logging
from collections.abc import Callable

from src.state.session import Session

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]


class SessionRegistry:
    """Map session ids to the upstream parameters they were created with.

    Entries are write-once. ``get`` returns ``None`` for unknown or expired ids
    and never raises. Expiry is disabled if ttl_s <= 0.

    ``claim`` hands an entry to exactly one caller until it is released or
    discarded; single-use bridging relies on it.
    """

    def __init__(self, *, ttl_s: float = 0.0, now_fn: TimeFn | None = None) -> None:
        self._ttl_s = max(0.0, float(ttl_s))
        self._now = now_fn or time.monotonic
        self._lock = asyncio.Lock()
        self._sessions: dict[str, Session] = {}
        self._claimed: set[str] = set()

    def now(self) -> float:
        return self._now()

    def _is_expired(self, session: Session, now: float) -> bool:
        return self._ttl_s > 0 and (now - session.created_at) >= self._ttl_s

    def _prune_locked(self) -> int:
        if self._ttl_s <= 0:
            return 0
        now = self._now()
        expired = [sid for sid, session in self._sessions.items() if self._is_expired(session, now)]
        for sid in expired:
            del self._sessions[sid]
            self._claimed.discard(sid)
        return len(expired)

    async def put(self, session: Session) -> None:
        async with self._lock:
            pruned = self._prune_locked()
            self._sessions[session.session_id] = session
        if pruned:
            logger.debug("session registry pruned %d expired sessions", pruned)

    def _get_locked(self, session_id: str) -> Session | None:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if self._is_expired(session, self._now()):
            del self._sessions[session_id]
            self._claimed.discard(session_id)
            logger.info("session expired session_id=%s", session_id)
            return None
        return session

    async def get(self, session_id: str | None) -> Session | None:
        if not session_id:
            return None
        async with self._lock:
            return self._get_locked(session_id)

    async def claim(self, session_id: str | None) -> Session | None:
        """Like ``get``, but returns ``None`` while another caller holds the entry."""
        if not session_id:
            return None
        async with self._lock:
            session = self._get_locked(session_id)
            if session is None or session_id in self._claimed:
                return None
            self._claimed.add(session_id)
            return session

    async def release(self, session_id: str) -> None:
        async with self._lock:
            self._claimed.discard(session_id)

    async def discard(self, session_id: str) -> bool:
        async with self._lock:
            self._claimed.discard(session_id)
            return self._sessions.pop(session_id, None) is not None

    async def prune(self) -> int:
        async with self._lock:
            return self._prune_locked()

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = ["SessionRegistry"]
