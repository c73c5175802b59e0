"""Shared error types for the voice relay."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpstreamSessionCreationFailed(Exception):
    """The upstream session-creation endpoint answered with a non-success status."""

    status: int
    body: str


@dataclass(frozen=True, slots=True)
class InvalidOrExpiredSession(Exception):
    session_id: str | None


@dataclass(frozen=True, slots=True)
class MissingUpstreamAddress(Exception):
    """The stored session parameters carry no connectable upstream address."""

    session_id: str


@dataclass(frozen=True, slots=True)
class UpstreamConnectionError(Exception):
    url: str
    reason: str


@dataclass(frozen=True, slots=True)
class ForwardingError(Exception):
    """A single frame could not be relayed.

    A log record, not a control-flow exception: the relay pumps build and log
    it, and never raise it.
    """

    direction: str
    reason: str


__all__ = [
    "ForwardingError",
    "InvalidOrExpiredSession",
    "MissingUpstreamAddress",
    "UpstreamConnectionError",
    "UpstreamSessionCreationFailed",
]
