#!/usr/bin/env python3
"""Smoke test a running relay: create a session, wait for proxy_ready, push audio, send stop."""

from __future__ import annotations

import sys
import json
import time
import asyncio
import argparse
from pathlib import Path

import httpx
from websockets.asyncio.client import connect

if __package__ in {None, ""}:
    sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from tests.params.env import build_ws_url, build_http_url, derive_default_server  # noqa: E402
from tests.e2e.printing import dim, format_fail, format_pass, format_error, section_header  # noqa: E402


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Smoke test the /session + /ws relay")
    p.add_argument("--server", default=derive_default_server(), help="host:port, http(s):// or ws(s)://")
    p.add_argument("--secure", action="store_true", help="Use https:// and wss://")
    p.add_argument("--model", default=None, help="Override the model for this session")
    p.add_argument("--chunks", type=int, default=10, help="Number of silent PCM16 chunks to send")
    p.add_argument("--chunk-bytes", type=int, default=4096)
    p.add_argument("--timeout", type=float, default=15.0, help="Per-step timeout (seconds)")
    p.add_argument("--listen", type=float, default=2.0, help="Seconds to collect upstream frames after sending")
    p.add_argument("--no-stop", action="store_true", help="Skip the stop control frame")
    return p.parse_args()


async def create_session(args: argparse.Namespace) -> str:
    url = build_http_url(args.server, secure=args.secure, path="/session")
    params = {"model": args.model} if args.model else None
    async with httpx.AsyncClient(timeout=args.timeout) as client:
        response = await client.get(url, params=params)
    body = response.json()
    if response.status_code != 200:
        raise RuntimeError(f"/session returned {response.status_code}: {body}")
    print(format_pass(f"session created: {body['sessionId']}"))
    print(dim(f"    remote: {json.dumps(body.get('remoteSession'))[:120]}"))
    return body["sessionId"]


async def _collect(ws, seconds: float) -> tuple[int, int]:
    text_frames = binary_frames = 0
    deadline = time.perf_counter() + seconds
    while (remaining := deadline - time.perf_counter()) > 0:
        try:
            message = await asyncio.wait_for(ws.recv(), timeout=remaining)
        except TimeoutError:
            break
        if isinstance(message, bytes):
            binary_frames += 1
        else:
            text_frames += 1
            print(dim(f"    <- {message[:120]}"))
    return text_frames, binary_frames


async def run(args: argparse.Namespace) -> int:
    print(f"\n{section_header('RELAY SMOKE')}")
    print(dim(f"  server: {args.server}"))

    try:
        session_id = await create_session(args)
    except Exception as exc:
        print(format_error("session creation failed", str(exc)))
        return 1

    ws_url = build_ws_url(args.server, secure=args.secure, session_id=session_id)
    t0 = time.perf_counter()
    async with connect(ws_url, max_size=None, open_timeout=args.timeout) as ws:
        first = json.loads(await asyncio.wait_for(ws.recv(), timeout=args.timeout))
        if first.get("type") != "proxy_ready":
            print(format_fail("proxy_ready", json.dumps(first)))
            return 1
        print(format_pass(f"proxy_ready in {(time.perf_counter() - t0) * 1000:.0f} ms"))

        silence = b"\x00" * args.chunk_bytes
        for _ in range(args.chunks):
            await ws.send(silence)
        print(format_pass(f"sent {args.chunks} x {args.chunk_bytes} bytes"))

        if not args.no_stop:
            await ws.send(json.dumps({"type": "control", "action": "stop"}))
            print(format_pass("sent stop control"))

        text_frames, binary_frames = await _collect(ws, args.listen)
        print(dim(f"  upstream frames: text={text_frames} binary={binary_frames}"))

    print(format_pass("closed cleanly"))
    return 0


def main() -> None:
    args = parse_args()
    try:
        code = asyncio.run(run(args))
    except KeyboardInterrupt:
        code = 130
    except Exception as exc:
        print(format_error("smoke run failed", repr(exc)))
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
