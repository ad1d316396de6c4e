"""Events and observer protocols for the LED board bridge."""

from .events import ConnectionEvent
from .observers import ConnectionObserver

__all__ = [
    "ConnectionEvent",
    "ConnectionObserver",
]
