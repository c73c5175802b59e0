from .runtime import RuntimeDeps
from .settings import AppSettings
from .session import ModelConfig, Session

__all__ = ["AppSettings", "ModelConfig", "RuntimeDeps", "Session"]
