"""
Centralized error handling utilities.

The bridge must never block gameplay because of hardware trouble, so
errors are handled in layers:

```
┌─────────────────────────────────────────┐
│  CALLER LAYER (game engine, CLI)    │
│  - Never sees exceptions from the   │
│    HardwareBridge facade            │
└─────────────────────────────────────────┘
                  ↑
                  │ fallback values, log records
                  │
┌─────────────────────────────────────────┐
│  FACADE LAYER (core.bridge)         │
│  - @handle_errors(re_raise=False)   │
│  - Converts bad input to            │
│    CommandValidationError           │
└─────────────────────────────────────────┘
                  ↑
                  │ LedBridgeError
                  │
┌─────────────────────────────────────────┐
│  LOW LEVEL (websocket, JSON, I/O)   │
│  - Raises library exceptions        │
│  - wrap_transport_error() converts  │
└─────────────────────────────────────────┘
```

### Handling Patterns

| Pattern | Code |
|---------|------|
| Log and return a fallback | `@handle_errors(operation_name="sync", re_raise=False, fallback_value=False)` |
| Log and re-raise | `@handle_errors(operation_name="load config")` |
| Critical section with auto-logging | `with ErrorContext("close transport", re_raise=False): ...` |
"""

import logging
from functools import wraps
from typing import Callable, Optional, TypeVar

from .base import CommandValidationError, LedBridgeError
from .config import ConfigFileInvalidError, ConfigValidationError
from .transport import TransportConnectError, TransportError, TransportSendError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def handle_errors(
    *,
    operation_name: str,
    user_notification: Optional[Callable[[str], None]] = None,
    fallback_value: Optional[T] = None,
    re_raise: bool = True,
    log_level: int = logging.ERROR
) -> Callable:
    """
    Decorator for consistent error handling.

    Args:
        operation_name: Name of the operation for logging (e.g., "sync game state")
        user_notification: Optional callback to notify user (e.g., click.echo)
        fallback_value: Value to return if error occurs and re_raise=False
        re_raise: Whether to re-raise the exception after handling
        log_level: Logging level for the error (default: ERROR)

    Example:
        ```python
        @handle_errors(operation_name="set LED", re_raise=False, fallback_value=False)
        def set_led(self, x, y, color):
            ...
        ```
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)

            except CommandValidationError as e:
                # Bad input is the caller's problem, not a fault
                logger.warning(f"Ignoring {operation_name}: {e.technical_message}")

                if user_notification:
                    user_notification(e.get_full_message())

                if re_raise:
                    raise
                return fallback_value

            except LedBridgeError as e:
                logger.log(log_level, f"Failed to {operation_name}: {e.technical_message}")

                if user_notification:
                    user_notification(e.get_full_message())

                if re_raise:
                    raise
                return fallback_value

            except Exception as e:
                logger.log(
                    log_level,
                    f"Unexpected error during {operation_name}: {e}",
                    exc_info=True
                )

                if user_notification:
                    user_notification(f"Error: {e}")

                if re_raise:
                    raise
                return fallback_value

        return wrapper
    return decorator


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("close transport", re_raise=False) as ctx:
            transport.close()

        if ctx.error:
            ...
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[Exception] = None

    def __enter__(self):
        """Enter the context."""
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Exit the context and handle any exceptions.

        Returns:
            True if exception should be suppressed, False otherwise
        """
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val

        if isinstance(exc_val, LedBridgeError):
            self.logger.error(
                f"Failed to {self.operation}: {exc_val.technical_message}"
            )
        else:
            self.logger.error(
                f"Failed to {self.operation}: {exc_val}",
                exc_info=True
            )

        return not self.re_raise


def wrap_pydantic_error(error: Exception, file_path: str) -> LedBridgeError:
    """
    Convert Pydantic validation errors from config loading to ledbridge exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Format: "Invalid JSON: <actual error> [type=json_invalid, ..."
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg

        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
            return ConfigValidationError(
                field=field,
                value=first_error.get('input', None),
                error_msg=first_error.get('msg', 'validation failed'),
                file_path=file_path
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")

            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=f"{len(errors)} validation errors:\n" + "\n".join(error_lines),
                file_path=file_path
            )

    return ConfigValidationError(
        field="unknown",
        value=None,
        error_msg=error_msg,
        file_path=file_path
    )


def wrap_request_error(error: Exception, operation: str) -> CommandValidationError:
    """
    Convert a Pydantic error raised while building a request struct.

    Args:
        error: The Pydantic ValidationError
        operation: Bridge operation whose parameters were rejected

    Returns:
        CommandValidationError naming the first offending parameter
    """
    from pydantic import ValidationError

    if isinstance(error, ValidationError) and error.errors():
        first_error = error.errors()[0]
        field = ".".join(str(loc) for loc in first_error.get('loc', ())) or "request"
        return CommandValidationError(operation, field, first_error.get('msg', 'invalid'))

    return CommandValidationError(operation, "request", str(error))


def wrap_transport_error(
    error: Exception,
    url: Optional[str] = None,
    connecting: bool = False
) -> TransportError:
    """
    Convert low-level socket/websocket errors to ledbridge exceptions.

    Args:
        error: The original exception from the websocket library
        url: Endpoint involved in the error
        connecting: True if the error happened while opening the link

    Returns:
        A TransportError with appropriate type and message
    """
    if isinstance(error, TransportError):
        return error

    if connecting:
        return TransportConnectError(url or "<unknown>", original_error=str(error))
    return TransportSendError(url, original_error=str(error))


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, LedBridgeError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
