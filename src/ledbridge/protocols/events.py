"""Domain events for observer pattern."""

from enum import Enum


class ConnectionEvent(Enum):
    """Events from the board connection lifecycle."""

    CONNECTED = "connected"                        # Link opened, board configured
    DISCONNECTED = "disconnected"                  # Open link dropped unexpectedly
    CONNECT_FAILED = "connect_failed"              # An attempt closed before opening
    RECONNECT_EXHAUSTED = "reconnect_exhausted"    # Automatic reconnects gave up
    SHUTDOWN = "shutdown"                          # Emergency shutdown completed
    HARDWARE_ERROR = "hardware_error"              # Board reported an error status
