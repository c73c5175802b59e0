"""One-shot upstream session creation."""

from __future__ import annotations

import uuid
import logging
from typing import Any

import httpx

from src.state.session import ModelConfig, Session
from src.errors import UpstreamSessionCreationFailed

from .registry import SessionRegistry

logger = logging.getLogger(__name__)


class SessionInitiator:
    """Create a remote live session and register it under a fresh id.

    A single attempt is made; callers retry by requesting a new session.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        registry: SessionRegistry,
        session_url: str,
        api_key: str,
        default_model: ModelConfig,
    ) -> None:
        self._http = http_client
        self._registry = registry
        self._session_url = session_url
        self._api_key = api_key
        self.default_model = default_model

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    async def create_session(self, model_config: ModelConfig | None = None) -> Session:
        config = model_config or self.default_model
        payload: dict[str, Any] = {
            "model": config.model,
            "instructions": config.instructions,
        }

        response = await self._http.post(self._session_url, json=payload, headers=self._headers())
        if not response.is_success:
            body = response.text
            logger.error("Failed to create session: status=%s body=%s", response.status_code, body)
            raise UpstreamSessionCreationFailed(status=response.status_code, body=body)

        remote = response.json()
        session = Session(
            session_id=str(uuid.uuid4()),
            upstream_params=remote,
            created_at=self._registry.now(),
            model=config.model,
        )
        await self._registry.put(session)
        logger.info("session created session_id=%s model=%s", session.session_id, config.model)
        return session


__all__ = ["SessionInitiator"]
