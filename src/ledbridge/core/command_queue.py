"""Ordered outbound buffer for board commands."""

import logging
from collections import deque
from typing import Callable, Optional

from ledbridge.exceptions import TransportError
from ledbridge.wire import Command

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10


class CommandQueue:
    """
    FIFO of commands waiting to be sent to the board.

    Commands survive disconnects: nothing is dropped while the link is
    down, they simply wait for the next drain with an open connection.
    The queue is unbounded.

    Not thread-safe on its own; the HardwareBridge serializes access.
    """

    def __init__(self, batch_size: int = DEFAULT_BATCH_SIZE):
        """
        Initialize the queue.

        Args:
            batch_size: Default maximum number of commands sent per drain
        """
        self.batch_size = batch_size
        self._commands: deque[Command] = deque()
        self._closed_warned = False

    def __len__(self) -> int:
        return len(self._commands)

    def enqueue(self, command: Command) -> None:
        """Append a command to the tail."""
        self._commands.append(command)

    def requeue_front(self, command: Command) -> None:
        """Put a command back at the head so it is sent next."""
        self._commands.appendleft(command)

    def clear(self) -> int:
        """
        Drop every queued command.

        Returns:
            Number of commands dropped
        """
        dropped = len(self._commands)
        self._commands.clear()
        return dropped

    def peek_all(self) -> list[Command]:
        """Snapshot of the queued commands, head first."""
        return list(self._commands)

    def drain(
        self,
        send: Callable[[str], bool],
        is_open: bool,
        max_count: Optional[int] = None,
    ) -> int:
        """
        Send up to `max_count` commands from the head of the queue.

        If a send fails, the command goes back to the head and the rest
        of this cycle is skipped, so order is always preserved.

        Args:
            send: Writes one JSON frame, returns False on failure
            is_open: Whether the connection is currently open
            max_count: Batch limit (defaults to batch_size)

        Returns:
            Number of commands sent
        """
        if not is_open:
            # Warn once per disconnected stretch, not on every tick
            if self._commands and not self._closed_warned:
                logger.warning(f"Cannot send {len(self._commands)} queued commands - not connected")
                self._closed_warned = True
            return 0

        self._closed_warned = False

        limit = self.batch_size if max_count is None else max_count
        sent = 0

        while self._commands and sent < limit:
            command = self._commands.popleft()
            message = command.to_json()

            try:
                ok = send(message)
            except TransportError as e:
                logger.error(f"Failed to send command: {e.technical_message}")
                ok = False

            if not ok:
                self.requeue_front(command)
                logger.debug(f"Requeued {command.cmd} command, {len(self._commands)} pending")
                break

            sent += 1
            logger.debug(f"Sent: {message}")

        return sent
