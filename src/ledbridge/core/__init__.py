"""Core bridge: queueing, connection management and the HardwareBridge facade."""

from .bridge import HardwareBridge
from .command_queue import DEFAULT_BATCH_SIZE, CommandQueue
from .connection import ConnectionManager
from .transport import Transport, TransportFactory, WebSocketTransport

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "CommandQueue",
    "ConnectionManager",
    "HardwareBridge",
    "Transport",
    "TransportFactory",
    "WebSocketTransport",
]
