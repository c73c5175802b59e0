from .bridge import RelayBridge
from .connection import RelayConnection
from .translator import ControlTranslator
from .state import RelayState, Termination, ConnectionState

__all__ = ["ConnectionState", "ControlTranslator", "RelayBridge", "RelayConnection", "RelayState", "Termination"]
