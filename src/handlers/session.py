"""HTTP handler for upstream session creation."""

from __future__ import annotations

import logging

from fastapi.responses import ORJSONResponse

from src.state.runtime import RuntimeDeps
from src.state.session import ModelConfig
from src.errors import UpstreamSessionCreationFailed

logger = logging.getLogger(__name__)


def _model_config(runtime_deps: RuntimeDeps, model: str | None) -> ModelConfig:
    default = runtime_deps.initiator.default_model
    requested = (model or "").strip()
    if not requested or requested == default.model:
        return default
    return ModelConfig(model=requested, instructions=default.instructions)


async def handle_create_session(runtime_deps: RuntimeDeps, model: str | None = None) -> ORJSONResponse:
    try:
        session = await runtime_deps.initiator.create_session(_model_config(runtime_deps, model))
    except UpstreamSessionCreationFailed as exc:
        return ORJSONResponse(
            {"error": "Failed to create remote session", "status": exc.status, "details": exc.body},
            status_code=500,
        )
    except Exception as exc:
        logger.exception("Error /session")
        return ORJSONResponse({"error": str(exc) or type(exc).__name__}, status_code=500)

    return ORJSONResponse(
        {
            "ok": True,
            "sessionId": session.session_id,
            "remoteSession": session.upstream_params,
        }
    )


__all__ = ["handle_create_session"]
