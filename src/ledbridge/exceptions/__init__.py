"""
Custom exception hierarchy for ledbridge.

## Exception Hierarchy

```
LedBridgeError (base)
├── TransportError
│   ├── TransportConnectError
│   └── TransportSendError
├── CommandValidationError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

All custom exceptions inherit from `LedBridgeError`, which provides
`user_message`, `technical_message`, `recoverable` and `recovery_hint`.

None of these ever escape the `HardwareBridge` facade: it logs them and
degrades to a no-op so the game keeps running without the board. They do
surface from configuration loading and from the CLI.

### Example: Invalid board URL

```python
from ledbridge.models import BridgeConfig

BridgeConfig(led_board_url="http://10.0.0.5")
# -> pydantic ValidationError; BridgeConfig.load_or_default() converts it to
#    ConfigValidationError("led_board_url", ..., "URL scheme must be ws:// or wss://")
```

See `ledbridge.exceptions.handlers` for the handling utilities.
"""

from .base import CommandValidationError, LedBridgeError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import (
    ErrorContext,
    format_error_for_display,
    handle_errors,
    wrap_pydantic_error,
    wrap_request_error,
    wrap_transport_error,
)
from .transport import TransportConnectError, TransportError, TransportSendError

__all__ = [
    # Base
    "CommandValidationError",
    "ConfigFileInvalidError",
    "ConfigValidationError",
    # Config
    "ConfigurationError",
    "ErrorContext",
    "LedBridgeError",
    # Transport
    "TransportConnectError",
    "TransportError",
    "TransportSendError",
    "format_error_for_display",
    # Handlers
    "handle_errors",
    "wrap_pydantic_error",
    "wrap_request_error",
    "wrap_transport_error",
]
