"""Enumerations for the LED board bridge."""

from enum import Enum


class ConnectionState(str, Enum):
    """Lifecycle of the WebSocket link to the board."""

    CLOSED = "closed"  # No link; reconnect policy may start a new attempt
    CONNECTING = "connecting"  # Handshake in flight
    OPEN = "open"  # Commands may be drained
    CLOSING = "closing"  # Close requested, not finished yet
