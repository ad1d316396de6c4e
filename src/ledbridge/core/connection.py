"""Connection lifecycle and reconnection policy for the LED board link."""

import logging
from typing import Optional

from ledbridge.exceptions import ErrorContext, TransportError
from ledbridge.models import BridgeConfig, ConnectionState
from ledbridge.protocols import ConnectionEvent
from ledbridge.wire import ClearCommand, ConfigCommand, HardwareResponse, UpdateCommand

from .command_queue import CommandQueue
from .transport import TransportFactory, WebSocketTransport

logger = logging.getLogger(__name__)

# (event, detail) pairs produced by poll() for the owner to dispatch
PendingEvents = list[tuple[ConnectionEvent, str]]


class ConnectionManager:
    """
    Owns the transport handle and drives the connection state machine.

    States: CLOSED → CONNECTING → OPEN → (CLOSING) → CLOSED

    Nothing happens in the background: the owner calls poll() once per
    tick and the manager reacts to whatever the transport reports.

    - CONNECTING → OPEN: reset reconnect attempts, send the board config,
      queue Clear + Update so the display starts from a known state.
    - OPEN → CLOSED (directly or via CLOSING): connection lost; reconnect
      timer starts.
    - CLOSED: after `reconnect_interval` seconds, try again, up to
      `max_reconnect_attempts` times. After that automatic reconnection
      stops until connect() is called by hand.

    A fresh transport is built for every attempt.

    Not thread-safe on its own; the HardwareBridge serializes access.
    """

    def __init__(
        self,
        config: BridgeConfig,
        command_queue: CommandQueue,
        transport_factory: Optional[TransportFactory] = None,
    ):
        """
        Initialize connection manager.

        Args:
            config: Bridge configuration (URL, reconnect policy, board config)
            command_queue: Queue that receives the Clear + Update on connect
            transport_factory: Builds a transport for a URL (default: WebSocketTransport)
        """
        self.config = config
        self.url = config.led_board_url
        self._queue = command_queue
        self._transport_factory = transport_factory or WebSocketTransport
        self._transport = None
        self._state = ConnectionState.CLOSED
        # The current transport reached OPEN; its CLOSED is a lost connection
        self._was_open = False
        self._reconnect_attempts = 0
        self._closed_since: Optional[float] = None
        self._auto_reconnect = False
        self._exhausted_reported = False

    # ================================================================
    # STATE
    # ================================================================

    @property
    def state(self) -> ConnectionState:
        """Connection state as of the last poll()."""
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state == ConnectionState.OPEN

    @property
    def has_transport(self) -> bool:
        return self._transport is not None

    @property
    def reconnect_attempts(self) -> int:
        return self._reconnect_attempts

    @property
    def max_reconnect_attempts(self) -> int:
        return self.config.max_reconnect_attempts

    @property
    def reconnect_exhausted(self) -> bool:
        """True once automatic reconnection has given up."""
        return self._reconnect_attempts >= self.config.max_reconnect_attempts

    # ================================================================
    # CONNECT / CLOSE
    # ================================================================

    def connect(self, now: float) -> bool:
        """
        Start a manual connection attempt.

        Resets the reconnect counter and re-enables automatic reconnection.

        Args:
            now: Current monotonic time

        Returns:
            True if an attempt was started (or the link is already open),
            False if one is already in flight or it could not be started
        """
        if self._state == ConnectionState.CONNECTING:
            logger.warning(f"Connection to {self.url} already in progress")
            return False

        if self._state == ConnectionState.OPEN:
            logger.debug(f"Already connected to {self.url}")
            return True

        self._reconnect_attempts = 0
        self._exhausted_reported = False
        self._auto_reconnect = self.config.auto_reconnect
        return self._start_attempt(now)

    def _start_attempt(self, now: float) -> bool:
        """Discard any old transport and begin connecting with a new one."""
        self._discard_transport()

        try:
            transport = self._transport_factory(self.url)
            transport.start()
        except TransportError as e:
            logger.error(f"Failed to connect: {e.technical_message}")
            self._closed_since = now
            return False
        except Exception as e:
            logger.error(f"Connection error for {self.url}: {e}", exc_info=True)
            self._closed_since = now
            return False

        self._transport = transport
        self._state = ConnectionState.CONNECTING
        logger.info(f"Attempting connection to {self.url}...")
        return True

    def close(self) -> None:
        """
        Close the link and drop the transport.

        Automatic reconnection stays off until the next connect().
        """
        self._auto_reconnect = False
        if self._transport is not None:
            self._state = ConnectionState.CLOSING
            logger.info(f"Closing connection to {self.url}")
        self._discard_transport()
        self._state = ConnectionState.CLOSED

    def _discard_transport(self) -> None:
        self._was_open = False
        if self._transport is None:
            return
        with ErrorContext("close transport", logger_instance=logger, re_raise=False):
            self._transport.close()
        self._transport = None

    # ================================================================
    # SEND
    # ================================================================

    def send(self, message: str) -> bool:
        """
        Write one frame if the link is open.

        Returns:
            True if the transport accepted the frame
        """
        if self._state != ConnectionState.OPEN or self._transport is None:
            return False

        try:
            self._transport.send(message)
            return True
        except TransportError as e:
            logger.error(f"Failed to send command: {e.technical_message}")
            return False

    # ================================================================
    # POLLING
    # ================================================================

    def poll(self, now: float) -> PendingEvents:
        """
        Advance the state machine by one tick.

        Args:
            now: Current monotonic time

        Returns:
            Events that occurred during this tick, in order
        """
        events: PendingEvents = []

        observed = self._transport.ready_state if self._transport else ConnectionState.CLOSED
        previous = self._state

        if observed == ConnectionState.OPEN and previous != ConnectionState.OPEN:
            self._state = ConnectionState.OPEN
            self._on_opened()
            events.append((ConnectionEvent.CONNECTED, ""))

        elif observed == ConnectionState.CLOSED and self._was_open:
            logger.error(f"Connection lost to LED board at {self.url}")
            self._on_closed(now)
            events.append((ConnectionEvent.DISCONNECTED, ""))

        elif observed == ConnectionState.CLOSED and previous in (
            ConnectionState.CONNECTING,
            ConnectionState.CLOSING,
        ):
            logger.warning(f"Could not connect to LED board at {self.url}")
            self._on_closed(now)
            events.append((ConnectionEvent.CONNECT_FAILED, ""))

        else:
            self._state = observed

        if self._state == ConnectionState.OPEN:
            events.extend(self._read_inbound())
        elif self._state == ConnectionState.CLOSED:
            events.extend(self._maybe_reconnect(now))

        return events

    def _on_opened(self) -> None:
        self._was_open = True
        self._reconnect_attempts = 0
        self._exhausted_reported = False
        logger.info(f"Connected to LED board at {self.url}")

        config_command = ConfigCommand(
            width=self.config.matrix_width,
            height=self.config.matrix_height,
            fps=self.config.hardware_fps,
            brightness=self.config.brightness,
        )
        if not self.send(config_command.to_json()):
            logger.warning("Failed to send initial configuration to LED board")

        self._queue.enqueue(ClearCommand())
        self._queue.enqueue(UpdateCommand())
        logger.info("Sent initial configuration to LED board")

    def _on_closed(self, now: float) -> None:
        self._discard_transport()
        self._state = ConnectionState.CLOSED
        self._closed_since = now

    def _maybe_reconnect(self, now: float) -> PendingEvents:
        if not self._auto_reconnect:
            return []

        if self.reconnect_exhausted:
            if not self._exhausted_reported:
                self._exhausted_reported = True
                logger.error(
                    f"Giving up on LED board at {self.url} after "
                    f"{self._reconnect_attempts} reconnection attempts"
                )
                return [(ConnectionEvent.RECONNECT_EXHAUSTED, "")]
            return []

        if self._closed_since is not None and now - self._closed_since < self.config.reconnect_interval:
            return []

        self._reconnect_attempts += 1
        logger.info(
            f"Reconnection attempt {self._reconnect_attempts}/{self.config.max_reconnect_attempts}"
        )
        self._start_attempt(now)
        return []

    def _read_inbound(self) -> PendingEvents:
        events: PendingEvents = []
        for raw in self._transport.receive():
            logger.debug(f"Received: {raw}")
            response = HardwareResponse.parse(raw)
            if response is not None and response.is_error:
                logger.error(f"Hardware error: {response.message}")
                events.append((ConnectionEvent.HARDWARE_ERROR, response.message or ""))
        return events
