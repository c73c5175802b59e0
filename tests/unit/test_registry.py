from __future__ import annotations

import pytest

from src.state.session import Session
from src.sessions.registry import SessionRegistry


class _Clock:
    def __init__(self) -> None:
        self.t = 100.0

    def __call__(self) -> float:
        return self.t


def _session(session_id: str, created_at: float) -> Session:
    return Session(session_id=session_id, upstream_params={"wsUrl": "wss://x"}, created_at=created_at)


@pytest.mark.asyncio
async def test_put_then_get() -> None:
    registry = SessionRegistry()
    session = _session("s1", 0.0)
    await registry.put(session)
    assert await registry.get("s1") is session
    assert len(registry) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("session_id", ["missing", "", None])
async def test_get_unknown_returns_none(session_id: str | None) -> None:
    registry = SessionRegistry()
    await registry.put(_session("s1", 0.0))
    assert await registry.get(session_id) is None


@pytest.mark.asyncio
async def test_get_expired_returns_none_and_evicts() -> None:
    clock = _Clock()
    registry = SessionRegistry(ttl_s=10.0, now_fn=clock)
    await registry.put(_session("s1", clock()))

    clock.t += 9.9
    assert await registry.get("s1") is not None

    clock.t += 0.1
    assert await registry.get("s1") is None
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_zero_ttl_never_expires() -> None:
    clock = _Clock()
    registry = SessionRegistry(ttl_s=0.0, now_fn=clock)
    await registry.put(_session("s1", clock()))
    clock.t += 1e9
    assert await registry.get("s1") is not None
    assert await registry.prune() == 0


@pytest.mark.asyncio
async def test_put_prunes_expired_entries() -> None:
    clock = _Clock()
    registry = SessionRegistry(ttl_s=5.0, now_fn=clock)
    await registry.put(_session("old", clock()))
    clock.t += 6.0
    await registry.put(_session("new", clock()))
    assert len(registry) == 1
    assert await registry.get("new") is not None


@pytest.mark.asyncio
async def test_discard() -> None:
    registry = SessionRegistry()
    await registry.put(_session("s1", 0.0))
    assert await registry.discard("s1") is True
    assert await registry.discard("s1") is False
    assert await registry.get("s1") is None


@pytest.mark.asyncio
async def test_claim_is_exclusive_until_released() -> None:
    registry = SessionRegistry()
    session = _session("s1", 0.0)
    await registry.put(session)

    assert await registry.claim("s1") is session
    assert await registry.claim("s1") is None
    # Plain reads are not blocked by a claim.
    assert await registry.get("s1") is session

    await registry.release("s1")
    assert await registry.claim("s1") is session


@pytest.mark.asyncio
async def test_discard_drops_claim_and_entry() -> None:
    registry = SessionRegistry()
    await registry.put(_session("s1", 0.0))

    assert await registry.claim("s1") is not None
    assert await registry.discard("s1") is True
    await registry.release("s1")
    assert await registry.claim("s1") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("session_id", ["missing", "", None])
async def test_claim_unknown_returns_none(session_id: str | None) -> None:
    registry = SessionRegistry()
    assert await registry.claim(session_id) is None


@pytest.mark.asyncio
async def test_claim_expired_returns_none() -> None:
    clock = _Clock()
    registry = SessionRegistry(ttl_s=10.0, now_fn=clock)
    await registry.put(_session("s1", clock()))
    clock.t += 10.0
    assert await registry.claim("s1") is None
    assert len(registry) == 0
