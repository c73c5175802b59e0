from .registry import SessionRegistry
from .initiator import SessionInitiator

__all__ = ["SessionInitiator", "SessionRegistry"]
