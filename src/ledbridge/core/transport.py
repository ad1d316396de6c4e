"""WebSocket transport to the LED board controller."""

import logging
import queue
import ssl
import threading
from typing import Callable, Optional, Protocol, runtime_checkable

import websocket

from ledbridge.exceptions import TransportConnectError, TransportSendError, wrap_transport_error
from ledbridge.models import ConnectionState

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """
    One connection attempt to the board.

    A transport is used for a single attempt and then thrown away; the
    ConnectionManager builds a fresh one for every (re)connect. Progress
    is observed by polling `ready_state` rather than through callbacks.
    """

    @property
    def ready_state(self) -> ConnectionState:
        """Current state of the link."""
        ...

    def start(self) -> None:
        """Begin connecting without blocking. Raises TransportConnectError."""
        ...

    def send(self, message: str) -> None:
        """Write one text frame. Raises TransportSendError."""
        ...

    def receive(self) -> list[str]:
        """Return and clear inbound frames received since the last call."""
        ...

    def close(self) -> None:
        """Close the link (idempotent)."""
        ...


TransportFactory = Callable[[str], Transport]


class WebSocketTransport:
    """
    websocket-client based transport.

    Socket I/O runs on a daemon thread (`WebSocketApp.run_forever`). The
    thread only publishes the ready state and pushes inbound frames onto
    a queue; the owner reads both on its own tick.
    """

    def __init__(self, url: str, verify_tls: bool = False):
        """
        Initialize transport.

        Args:
            url: ws:// or wss:// endpoint
            verify_tls: Verify the board's certificate on wss:// (boards on
                        the local network usually have self-signed ones)
        """
        self.url = url
        self._verify_tls = verify_tls
        self._state = ConnectionState.CLOSED
        self._state_lock = threading.Lock()
        self._inbound: queue.Queue[str] = queue.Queue()
        self._app: Optional[websocket.WebSocketApp] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def ready_state(self) -> ConnectionState:
        with self._state_lock:
            return self._state

    def _set_state(self, state: ConnectionState) -> None:
        with self._state_lock:
            self._state = state

    def start(self) -> None:
        if self._app is not None:
            raise TransportConnectError(self.url, "transport already started")

        try:
            self._app = websocket.WebSocketApp(
                self.url,
                on_open=self._on_open,
                on_message=self._on_message,
                on_error=self._on_error,
                on_close=self._on_close,
            )
        except (ValueError, websocket.WebSocketException) as e:
            self._app = None
            raise wrap_transport_error(e, self.url, connecting=True) from e

        self._set_state(ConnectionState.CONNECTING)
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        sslopt = None if self._verify_tls else {"cert_reqs": ssl.CERT_NONE}
        try:
            self._app.run_forever(sslopt=sslopt)
        except Exception as e:
            logger.error(f"WebSocket loop for {self.url} ended with error: {e}")
        finally:
            self._set_state(ConnectionState.CLOSED)

    def _on_open(self, ws) -> None:
        logger.debug(f"WebSocket handshake complete: {self.url}")
        self._set_state(ConnectionState.OPEN)

    def _on_message(self, ws, message) -> None:
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        self._inbound.put(message)

    def _on_error(self, ws, error) -> None:
        logger.debug(f"WebSocket error on {self.url}: {error}")

    def _on_close(self, ws, close_status_code, close_msg) -> None:
        logger.debug(f"WebSocket closed ({close_status_code}): {close_msg}")
        self._set_state(ConnectionState.CLOSED)

    def send(self, message: str) -> None:
        if self._app is None or self.ready_state != ConnectionState.OPEN:
            raise TransportSendError(self.url, "link is not open")

        try:
            self._app.send(message)
        except (websocket.WebSocketException, OSError) as e:
            raise wrap_transport_error(e, self.url) from e

    def receive(self) -> list[str]:
        messages = []
        while True:
            try:
                messages.append(self._inbound.get_nowait())
            except queue.Empty:
                return messages

    def close(self) -> None:
        if self._app is None:
            self._set_state(ConnectionState.CLOSED)
            return

        self._set_state(ConnectionState.CLOSING)
        try:
            self._app.close()
        except (websocket.WebSocketException, OSError) as e:
            logger.debug(f"Error closing WebSocket {self.url}: {e}")

        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=1.0)

        self._set_state(ConnectionState.CLOSED)
