"""Observer protocol definitions for bridge events."""

from typing import Protocol, runtime_checkable

from .events import ConnectionEvent


@runtime_checkable
class ConnectionObserver(Protocol):
    """
    Observer that receives board connection events.

    Lets the game (or a diagnostics screen) react to the board coming and
    going without polling get_status().
    """

    def on_connection_event(self, event: ConnectionEvent, url: str, detail: str = "") -> None:
        """
        Handle a connection lifecycle event.

        Args:
            event: The type of connection event
            url: Endpoint of the board
            detail: Extra context (e.g. the board's error message)

        Note:
            Called from whichever thread runs HardwareBridge.tick(), after
            the bridge lock has been released.
        """
        ...
