"""Transport-related exceptions.

This module defines exceptions for the WebSocket link to the LED board:
- TransportError: Base class for link errors
- TransportConnectError: The board could not be reached
- TransportSendError: A frame could not be written to an open link
"""

from typing import Optional

from .base import LedBridgeError


class TransportError(LedBridgeError):
    """WebSocket link to the LED board failed."""

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        url: Optional[str] = None,
        **kwargs
    ):
        super().__init__(
            user_message=user_message,
            technical_message=technical_message,
            recoverable=True,
            **kwargs
        )
        self.url = url


class TransportConnectError(TransportError):
    """Connection to the LED board could not be started."""

    def __init__(self, url: str, original_error: Optional[str] = None):
        """
        Initialize connect error.

        Args:
            url: Endpoint that was being contacted
            original_error: Message from the underlying socket library
        """
        technical = f"Connect to {url} failed"
        if original_error:
            technical += f": {original_error}"

        super().__init__(
            user_message=f"Could not connect to LED board at {url}",
            technical_message=technical,
            url=url,
            recovery_hint=(
                "Check that the board is powered and on the same network.\n"
                "Override the endpoint with the LED_BOARD_URL environment variable."
            ),
        )
        self.original_error = original_error


class TransportSendError(TransportError):
    """A command frame could not be delivered over an open link."""

    def __init__(self, url: Optional[str], original_error: Optional[str] = None):
        super().__init__(
            user_message="Failed to send command to LED board",
            technical_message=f"Send to {url} failed: {original_error}",
            url=url,
        )
        self.original_error = original_error
