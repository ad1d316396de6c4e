"""HardwareBridge - the facade the game talks to."""

import logging
import threading
import time
from collections.abc import Mapping
from typing import Any, Callable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from ledbridge.exceptions import (
    CommandValidationError,
    ConfigurationError,
    handle_errors,
    wrap_request_error,
)
from ledbridge.matrix import MatrixMapper
from ledbridge.models import (
    BridgeConfig,
    BridgeStatus,
    Color,
    LogicalPosition,
    PhysicalPosition,
    SetLedRequest,
    SyncGameStateRequest,
    TileState,
    TriggerEffectRequest,
)
from ledbridge.protocols import ConnectionEvent, ConnectionObserver
from ledbridge.tile_colors import get_tile_color
from ledbridge.utils import ObserverManager
from ledbridge.wire import (
    DEFAULT_EFFECT_DURATION,
    ClearCommand,
    Command,
    EffectCommand,
    SetPixelCommand,
    UpdateCommand,
    find_preset,
)

from .command_queue import CommandQueue
from .connection import ConnectionManager, PendingEvents
from .transport import TransportFactory

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


def _build_request(model: type[R], operation: str, **kwargs: Any) -> R:
    """Validate facade arguments into a request struct."""
    try:
        return model(**kwargs)
    except ValidationError as e:
        raise wrap_request_error(e, operation) from e


class HardwareBridge:
    """
    Mirrors game state onto the 16x11 LED board.

    The bridge keeps a shadow copy of what every pixel should show
    (LedState) and only queues commands for pixels that actually change.
    Queued commands are sent in small batches on each tick once the sync
    interval has elapsed, so a burst of game updates never floods the
    board.

    Every public operation is safe to call at any time, connected or not:
    failures are logged and reported through return values and
    get_status(), never raised to the caller.

    Usage:
        Hosts with their own frame loop call tick() every frame:

        ```python
        bridge = HardwareBridge(BridgeConfig.load_or_default())
        bridge.connect()
        while running:
            bridge.sync_game_state(cells)
            bridge.tick()
        bridge.emergency_shutdown()
        ```

        Otherwise start() runs the ticks on a background thread:

        ```python
        with HardwareBridge() as bridge:
            bridge.connect()
            bridge.trigger_effect("victory")
        ```
    """

    def __init__(
        self,
        config: Optional[BridgeConfig] = None,
        transport_factory: Optional[TransportFactory] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the bridge. Does not connect.

        Args:
            config: Bridge configuration (default: loaded from ~/.ledbridge/config.json)
            transport_factory: Builds a transport per connection attempt
                               (default: WebSocketTransport)
            clock: Monotonic time source in seconds
        """
        if config is None:
            config = self._load_default_config()

        self.config = config
        self._clock = clock
        self._lock = threading.RLock()

        self.mapper = MatrixMapper(
            width=config.matrix_width,
            height=config.matrix_height,
            grid_width=config.grid_width,
            grid_height=config.grid_height,
        )
        self._queue = CommandQueue(batch_size=config.max_commands_per_tick)
        self._connection = ConnectionManager(config, self._queue, transport_factory)
        self._led_state: dict[PhysicalPosition, Color] = {}
        self._last_drain: Optional[float] = None

        self._observers = ObserverManager[ConnectionObserver](observer_type_name="connection")

        # Background ticker
        self._running = False
        self._ticker_thread: Optional[threading.Thread] = None

        logger.info(
            f"LED bridge ready for {config.led_board_url} "
            f"({config.matrix_width}x{config.matrix_height} matrix, "
            f"{config.grid_width}x{config.grid_height} game grid)"
        )

    @staticmethod
    def _load_default_config() -> BridgeConfig:
        try:
            return BridgeConfig.load_or_default()
        except ConfigurationError as e:
            logger.error(f"{e.technical_message}; falling back to default bridge settings")
            return BridgeConfig()

    # ================================================================
    # OBSERVERS
    # ================================================================

    def register_observer(self, observer: ConnectionObserver) -> None:
        """Register to receive connection lifecycle events."""
        self._observers.register(observer)

    def unregister_observer(self, observer: ConnectionObserver) -> None:
        self._observers.unregister(observer)

    def _dispatch(self, events: PendingEvents) -> None:
        """Notify observers. Must be called without holding the bridge lock."""
        for event, detail in events:
            self._observers.notify("on_connection_event", event, self.config.led_board_url, detail)

    # ================================================================
    # CONNECTION
    # ================================================================

    @handle_errors(operation_name="connect to LED board", re_raise=False, fallback_value=False)
    def connect(self) -> bool:
        """
        Start connecting to the board.

        Resets the reconnect counter, so this also revives a bridge that
        has given up reconnecting on its own. Completion is observed on a
        later tick().

        Returns:
            True if an attempt is underway (or already connected)
        """
        with self._lock:
            return self._connection.connect(self._clock())

    @property
    def is_connected(self) -> bool:
        with self._lock:
            return self._connection.is_open

    # ================================================================
    # GAME STATE
    # ================================================================

    @handle_errors(operation_name="sync game state", re_raise=False, fallback_value=0)
    def sync_game_state(
        self,
        cells: SyncGameStateRequest | Mapping[LogicalPosition | tuple[int, int], TileState],
    ) -> int:
        """
        Mirror a snapshot of the game grid onto the board.

        Only pixels whose color differs from LedState are queued; the
        batch always ends with a single Update. Cells that map off the
        matrix are skipped.

        Args:
            cells: Request, or a mapping of game cell → TileState.
                   Cells may be LogicalPosition or (x, y) tuples.

        Returns:
            Number of SetPixel commands queued
        """
        if isinstance(cells, SyncGameStateRequest):
            request = cells
        else:
            request = _build_request(SyncGameStateRequest, "sync_game_state", cells=cells)

        with self._lock:
            frame = self._render(request.cells)

            changed = 0
            for position, color in frame.items():
                if self._led_state.get(position) == color:
                    continue
                self._queue.enqueue(SetPixelCommand(position=position, color=color))
                self._led_state[position] = color
                changed += 1

            self._queue.enqueue(UpdateCommand())

        logger.debug(f"Synced {len(request.cells)} cells, {changed} LEDs changed")
        return changed

    def _render(self, cells: Mapping[LogicalPosition, TileState]) -> dict[PhysicalPosition, Color]:
        """
        Compute the desired color of every pixel the snapshot touches.

        Glows never land on primaries. Cells are rendered in row-major
        order, so where glows of neighbouring cells overlap the cell
        furthest along that order wins, whatever order the mapping has.
        """
        frame: dict[PhysicalPosition, Color] = {}

        for logical, tile in sorted(cells.items(), key=lambda item: (item[0].y, item[0].x)):
            primary = self.mapper.game_to_led(logical)
            if not self.mapper.in_bounds(primary.x, primary.y):
                logger.debug(f"Skipping cell {logical.as_tuple()}: off the LED matrix")
                continue

            color = get_tile_color(tile)
            frame[primary] = color

            if tile.lit:
                glow = self.mapper.glow_color(color)
                for position in sorted(
                    self.mapper.secondary_glow_positions(primary), key=lambda p: (p.y, p.x)
                ):
                    frame[position] = glow

        return frame

    @handle_errors(operation_name="set LED", re_raise=False, fallback_value=False)
    def set_led(
        self,
        x: Optional[int] = None,
        y: Optional[int] = None,
        color: Optional[Color] = None,
        *,
        request: Optional[SetLedRequest] = None,
    ) -> bool:
        """
        Set one pixel directly, bypassing the game-grid mapping.

        Meant for diagnostics. The pixel is still recorded in LedState so
        later syncs diff against it.

        Returns:
            True if the pixel was queued
        """
        if request is None:
            request = _build_request(SetLedRequest, "set_led", x=x, y=y, color=color)

        if not self.mapper.in_bounds(request.x, request.y):
            raise CommandValidationError(
                "set_led", "x/y", f"({request.x}, {request.y}) is off the LED matrix"
            )

        position = PhysicalPosition(x=request.x, y=request.y)
        with self._lock:
            self._queue.enqueue(SetPixelCommand(position=position, color=request.color))
            self._led_state[position] = request.color
        return True

    @handle_errors(operation_name="trigger effect", re_raise=False, fallback_value=False)
    def trigger_effect(
        self,
        name: Optional[str] = None,
        position: LogicalPosition | tuple[int, int] | None = None,
        color: Optional[Color] = None,
        duration: Optional[float] = None,
        *,
        request: Optional[TriggerEffectRequest] = None,
    ) -> bool:
        """
        Queue a board animation.

        Known gameplay names (see wire.effects) are translated to the
        board's animation name and fill in a default color and duration.
        Explicit arguments override those defaults. Unknown names are
        forwarded unchanged.

        Args:
            name: Effect name
            position: Game cell the effect starts from
            color: Effect color (black/None lets the board choose)
            duration: Seconds

        Returns:
            True if the effect was queued
        """
        if request is None:
            request = _build_request(
                TriggerEffectRequest,
                "trigger_effect",
                name=name,
                position=position,
                color=color,
                duration=duration,
            )

        preset = find_preset(request.name)
        if preset is not None:
            if preset.needs_position and request.position is None:
                raise CommandValidationError(
                    "trigger_effect", "position", f"effect '{request.name}' needs a game cell"
                )
            wire_name = preset.wire_name
            effect_color = request.color if request.color is not None else preset.color
            effect_duration = request.duration if request.duration is not None else preset.duration
        else:
            logger.debug(f"No preset for effect '{request.name}', forwarding as-is")
            wire_name = request.name
            effect_color = request.color
            effect_duration = (
                request.duration if request.duration is not None else DEFAULT_EFFECT_DURATION
            )

        physical = (
            self.mapper.game_to_led(request.position) if request.position is not None else None
        )
        command = EffectCommand(
            name=wire_name, duration=effect_duration, position=physical, color=effect_color
        )

        with self._lock:
            self._queue.enqueue(command)

        logger.info(f"Triggered effect {wire_name} ({effect_duration}s)")
        return True

    # ================================================================
    # TICK
    # ================================================================

    @handle_errors(operation_name="process LED queue", re_raise=False, fallback_value=0)
    def tick(self, now: Optional[float] = None) -> int:
        """
        Advance the connection and send one batch if the interval elapsed.

        Call once per frame (or let start() do it).

        Args:
            now: Monotonic time (default: the bridge clock)

        Returns:
            Number of commands sent this tick
        """
        with self._lock:
            if now is None:
                now = self._clock()

            events = self._connection.poll(now)
            if self.config.replay_on_reconnect and any(
                event == ConnectionEvent.CONNECTED for event, _ in events
            ):
                self._replay_led_state()

            sent = 0
            if self._last_drain is None or now - self._last_drain >= self.config.sync_interval:
                self._last_drain = now
                sent = self._queue.drain(self._connection.send, self._connection.is_open)

        self._dispatch(events)
        return sent

    def _replay_led_state(self) -> None:
        """Queue every known pixel again after the connect-time Clear."""
        for position, color in self._led_state.items():
            if not color.is_black:
                self._queue.enqueue(SetPixelCommand(position=position, color=color))
        self._queue.enqueue(UpdateCommand())
        logger.info(f"Replaying {len(self._led_state)} LEDs after reconnect")

    # ================================================================
    # SHUTDOWN
    # ================================================================

    @handle_errors(operation_name="shut down LED board", re_raise=False, fallback_value=False)
    def emergency_shutdown(self) -> bool:
        """
        Blank the board and drop the connection, right now.

        Queues Clear + Update, flushes the whole queue without waiting for
        the sync interval, then closes the transport. Automatic reconnect
        stays off until connect() is called again.

        Returns:
            True if the board was reachable for the final clear
        """
        with self._lock:
            self._queue.enqueue(ClearCommand())
            self._queue.enqueue(UpdateCommand())

            was_open = self._connection.is_open
            sent = self._queue.drain(
                self._connection.send, was_open, max_count=len(self._queue)
            )
            self._connection.close()

        if was_open:
            logger.info(f"Emergency shutdown: board cleared ({sent} commands flushed)")
        else:
            logger.warning("Emergency shutdown while disconnected: board not cleared")

        self._dispatch([(ConnectionEvent.SHUTDOWN, "")])
        return was_open

    @handle_errors(operation_name="close LED board connection", re_raise=False)
    def close(self) -> None:
        """Drop the connection without touching the display."""
        with self._lock:
            self._connection.close()

    # ================================================================
    # STATUS
    # ================================================================

    def get_status(self) -> BridgeStatus:
        """Snapshot of the connection, queue and display state."""
        with self._lock:
            connection = self._connection
            return BridgeStatus(
                connected=connection.is_open,
                connection_state=connection.state.value,
                url=self.config.led_board_url,
                led_count=self.mapper.led_count,
                board_dimensions=(self.mapper.width, self.mapper.height),
                queued_commands=len(self._queue),
                active_leds=len(self._led_state),
                reconnect_attempts=connection.reconnect_attempts,
                max_reconnect_attempts=connection.max_reconnect_attempts,
                reconnect_exhausted=connection.reconnect_exhausted,
                sync_fps=self.config.sync_fps,
                matrix_dimensions=f"{self.mapper.width}x{self.mapper.height}",
                game_grid_dimensions=f"{self.mapper.grid_width}x{self.mapper.grid_height}",
            )

    @property
    def led_state(self) -> dict[PhysicalPosition, Color]:
        """Copy of the last color sent for every touched pixel."""
        with self._lock:
            return dict(self._led_state)

    @property
    def pending_commands(self) -> list[Command]:
        """Commands waiting to be sent, head first."""
        with self._lock:
            return self._queue.peek_all()

    # ================================================================
    # BACKGROUND TICKER
    # ================================================================

    def start(self) -> None:
        """Run tick() on a background thread at the sync interval."""
        if self._running:
            logger.warning("HardwareBridge ticker is already running")
            return

        self._running = True
        self._ticker_thread = threading.Thread(target=self._run_ticker, daemon=True)
        self._ticker_thread.start()
        logger.debug("HardwareBridge ticker started")

    def stop(self) -> None:
        """Stop the background ticker. The connection is left as is."""
        self._running = False

        if self._ticker_thread and self._ticker_thread.is_alive():
            self._ticker_thread.join(timeout=1.0)
        self._ticker_thread = None

        logger.debug("HardwareBridge ticker stopped")

    def _run_ticker(self) -> None:
        while self._running:
            self.tick()
            time.sleep(self.config.sync_interval)

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit: stop ticking and blank the board."""
        self.stop()
        self.emergency_shutdown()
