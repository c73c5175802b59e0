"""Model configuration (env-resolved constants only)."""

from __future__ import annotations

import os

DEFAULT_MODEL_NAME = "gemini-2.5-flash-preview-native-audio-dialog"

MODEL_NAME: str = (os.getenv("MODEL_NAME") or "").strip() or DEFAULT_MODEL_NAME

# Scopes the assistant to Revolt Motors topics.
SYSTEM_INSTRUCTIONS: str = (
    'You are "Rev", a Revolt Motors assistant. Answer only about Revolt Motors: '
    "bikes, specs, prices, service, availability.\n"
    "If asked about unrelated topics, politely redirect to Revolt Motors topics."
)

__all__ = ["DEFAULT_MODEL_NAME", "MODEL_NAME", "SYSTEM_INSTRUCTIONS"]
